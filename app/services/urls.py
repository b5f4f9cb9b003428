from urllib.parse import quote

from starlette.requests import Request

UPLOADS_PATH = "/uploads"

def _first(value: str) -> str:
    return value.split(",", 1)[0].strip()

def base_url(public_base_url: str, request: Request) -> str:
    if public_base_url:
        return public_base_url.rstrip("/")
    headers = request.headers
    proto = _first(headers.get("x-forwarded-proto") or request.url.scheme or "http")
    host = _first(headers.get("x-forwarded-host") or headers.get("host") or request.url.netloc)
    return f"{proto}://{host}"

def file_url(base: str, filename: str) -> str:
    return f"{base}{UPLOADS_PATH}/{quote(filename, safe='')}"
