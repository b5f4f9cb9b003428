import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        UPLOAD_DIR=tmp_path / "uploads",
        DATA_DIR=tmp_path / "data",
        LOG_DIR=tmp_path / "logs",
        MAX_FILE_MB=1,
        PUBLIC_BASE_URL="",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def upload(client):
    def _upload(numero="12345", filename="nf.pdf", content=b"%PDF-1.4 test", data=None, **kwargs):
        form = {"numeroEnvio": numero}
        if data is not None:
            form["data"] = data
        return client.post(
            "/api/notas",
            data=form,
            files={"arquivo": (filename, content, "application/pdf")},
            **kwargs,
        )
    return _upload
