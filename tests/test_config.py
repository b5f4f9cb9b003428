from pathlib import Path

from app.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("PORT", "MAX_FILE_MB", "PUBLIC_BASE_URL", "UPLOAD_DIR"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.PORT == 3000
    assert s.MAX_FILE_MB == 25
    assert s.MAX_FILE_BYTES == 25 * 1024 * 1024
    assert s.PUBLIC_BASE_URL == ""
    assert s.UPLOAD_DIR == Path("uploads").resolve()


def test_blank_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("PORT", "")
    monkeypatch.setenv("MAX_FILE_MB", "")
    s = Settings()
    assert s.PORT == 3000
    assert s.MAX_FILE_MB == 25


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("MAX_FILE_MB", "0.5")
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://files.example.com//")
    s = Settings()
    assert s.PORT == 8080
    assert s.MAX_FILE_BYTES == 512 * 1024
    assert s.PUBLIC_BASE_URL == "https://files.example.com"
