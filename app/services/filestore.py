# app/services/filestore.py
import logging
import os
import time
from pathlib import Path
from typing import List, Optional, Tuple

from app.services.sanitizer import sanitize

CHUNK_SIZE = 1024 * 1024
_MAX_NAME_RETRIES = 100


class FileTooLarge(Exception):
    def __init__(self, max_bytes: int):
        super().__init__(f"upload exceeds {max_bytes} bytes")
        self.max_bytes = max_bytes


def build_name(numero: str, original_filename: str, ts: int) -> str:
    return f"{sanitize(numero or 'sem_numero')}-{ts}-{sanitize(original_filename or 'arquivo')}"


def _embedded_timestamp(name: str, prefix: str) -> int:
    head = name[len(prefix):].split("-", 1)[0]
    return int(head) if head.isdigit() else -1


class UploadStore:
    """
    Content directory for uploaded files.

    Stored names look like `<numero>-<epoch ms>-<original name>`. The millisecond
    value comes from a clock that never repeats inside one store, and files are
    created exclusively, so two uploads never share a name.
    """

    def __init__(self, base: Path):
        self.base = Path(base).resolve()
        self._last_ms = 0

    def ensure(self) -> None:
        self.base.mkdir(parents=True, exist_ok=True)

    def _next_ms(self) -> int:
        now = int(time.time() * 1000)
        self._last_ms = max(now, self._last_ms + 1)
        return self._last_ms

    def path_for(self, name: str) -> Path:
        return self.base / name

    def _create(self, numero: str, original_filename: str) -> Tuple[str, Path, object]:
        for _ in range(_MAX_NAME_RETRIES):
            name = build_name(numero, original_filename, self._next_ms())
            path = self.path_for(name)
            try:
                return name, path, path.open("xb")
            except FileExistsError:
                continue
        raise FileExistsError(f"could not allocate a unique name for {numero!r}")

    async def save(self, numero: str, original_filename: Optional[str], upload, max_bytes: int) -> str:
        """
        Copy `upload` (anything with an async `read(size)`) into the content directory.

        Returns the stored name. Raises FileTooLarge after removing the partial file
        when more than `max_bytes` arrive.
        """
        name, path, out = self._create(numero, original_filename or "")
        written = 0
        try:
            with out:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise FileTooLarge(max_bytes)
                    out.write(chunk)
        except BaseException:
            path.unlink(missing_ok=True)
            raise
        logging.info(f"[UPLOAD] saved {name} ({written} bytes)")
        return name

    def list_names(self) -> List[str]:
        if not self.base.is_dir():
            return []
        with os.scandir(self.base) as it:
            return [e.name for e in it if e.is_file()]

    def find_latest(self, prefix: str) -> Optional[str]:
        """Newest stored name for `<prefix>-...`, by embedded timestamp then name."""
        head = f"{prefix}-"
        candidates = [n for n in self.list_names() if n.startswith(head)]
        if not candidates:
            return None
        return max(candidates, key=lambda n: (_embedded_timestamp(n, head), n))
