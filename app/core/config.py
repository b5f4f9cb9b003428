
import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

load_dotenv(override=True)

def _env(name: str, default: str) -> str:
    return os.getenv(name) or default

@dataclass
class Settings:
    PORT: int = field(default_factory=lambda: int(_env("PORT", "3000")))
    HOST: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    MAX_FILE_MB: float = field(default_factory=lambda: float(_env("MAX_FILE_MB", "25")))
    PUBLIC_BASE_URL: str = field(default_factory=lambda: _env("PUBLIC_BASE_URL", ""))
    UPLOAD_DIR: Path = field(default_factory=lambda: Path(_env("UPLOAD_DIR", "uploads")))
    DATA_DIR: Path = field(default_factory=lambda: Path(_env("DATA_DIR", "data")))
    LOG_DIR: Path = field(default_factory=lambda: Path(_env("LOG_DIR", "logs")))
    LOG_LEVEL: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    def __post_init__(self):
        self.UPLOAD_DIR = Path(self.UPLOAD_DIR).resolve()
        self.DATA_DIR = Path(self.DATA_DIR).resolve()
        self.LOG_DIR = Path(self.LOG_DIR)
        self.PUBLIC_BASE_URL = (self.PUBLIC_BASE_URL or "").rstrip("/")

    @property
    def INDEX_FILE(self) -> Path:
        return self.DATA_DIR / "index.json"

    @property
    def MAX_FILE_BYTES(self) -> int:
        return int(self.MAX_FILE_MB * 1024 * 1024)
