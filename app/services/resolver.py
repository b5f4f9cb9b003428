# app/services/resolver.py
from typing import Callable, NamedTuple, Optional

from app.services.filestore import UploadStore
from app.services.index_store import IndexStore
from app.services.sanitizer import sanitize


class Resolution(NamedTuple):
    numero: str
    arquivo_url: str
    source: str  # "index" or "filesystem"


def find_nota(
    numero: str,
    index: IndexStore,
    uploads: UploadStore,
    build_url: Callable[[str], str],
) -> Optional[Resolution]:
    """
    Current file for `numero`.

    The newest index record wins (ties go to the one appended last) and its
    stored URL is returned untouched. Without an index match the content
    directory is scanned for `<sanitized numero>-*` and a URL is built for the
    current request.
    """
    numero = str(numero)
    matches = [(rec.timestamp, pos, rec) for pos, rec in enumerate(index.load().items) if rec.numero == numero]
    if matches:
        _, _, found = max(matches, key=lambda m: (m[0], m[1]))
        return Resolution(found.numero, found.arquivo_url, "index")

    name = uploads.find_latest(sanitize(numero))
    if name is None:
        return None
    return Resolution(numero, build_url(name), "filesystem")
