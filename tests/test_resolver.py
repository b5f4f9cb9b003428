import pytest

from app.services.filestore import UploadStore
from app.services.index_store import IndexDocument, IndexStore, UploadRecord
from app.services.resolver import find_nota


@pytest.fixture
def stores(tmp_path):
    uploads = UploadStore(tmp_path / "uploads")
    uploads.ensure()
    index = IndexStore(tmp_path / "data" / "index.json")
    index.ensure()
    return index, uploads


def build_url(name):
    return f"http://fallback/uploads/{name}"


def rec(numero, ts, url):
    return UploadRecord(numero=numero, filename=url.rsplit("/", 1)[-1], arquivo_url=url, timestamp=ts)


def test_most_recent_index_record_wins(stores):
    index, uploads = stores
    index.save(IndexDocument(items=[
        rec("1", 200, "http://old-host/uploads/new.pdf"),
        rec("1", 100, "http://old-host/uploads/old.pdf"),
        rec("2", 900, "http://old-host/uploads/other.pdf"),
    ]))
    found = find_nota("1", index, uploads, build_url)
    assert found.arquivo_url == "http://old-host/uploads/new.pdf"
    assert found.source == "index"


def test_equal_timestamps_prefer_last_appended(stores):
    index, uploads = stores
    index.save(IndexDocument(items=[rec("1", 100, "http://h/uploads/a"), rec("1", 100, "http://h/uploads/b")]))
    assert find_nota("1", index, uploads, build_url).arquivo_url == "http://h/uploads/b"


def test_index_match_is_string_comparison(stores):
    index, uploads = stores
    index.save(IndexDocument(items=[rec("007", 1, "http://h/uploads/a")]))
    assert find_nota("7", index, uploads, build_url) is None
    assert find_nota("007", index, uploads, build_url) is not None


def test_falls_back_to_directory_scan(stores):
    index, uploads = stores
    uploads.path_for("NF_1-100-a.pdf").write_bytes(b"")
    uploads.path_for("NF_1-200-b.pdf").write_bytes(b"")
    found = find_nota("NF/1", index, uploads, build_url)
    assert found.numero == "NF/1"
    assert found.arquivo_url == "http://fallback/uploads/NF_1-200-b.pdf"
    assert found.source == "filesystem"


def test_not_found(stores):
    index, uploads = stores
    uploads.path_for("12-1-a.pdf").write_bytes(b"")
    assert find_nota("1", index, uploads, build_url) is None
