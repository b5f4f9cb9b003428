"""
Notas upload service
- /health : liveness probe
- /api/notas : upload a document for a shipment number, look it up later
- /uploads : stored documents, served statically
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes.health import router as health_router
from app.api.routes.notas import router as notas_router
from app.core.config import Settings
from app.core.errors import (
    ApiError,
    ERR_BAD_REQUEST,
    ERR_INTERNAL,
    ERR_ROUTE_NOT_FOUND,
    ERR_UPLOAD_FIELDS,
    error_body,
)
from app.core.logging import configure_logging
from app.services.filestore import UploadStore
from app.services.index_store import IndexStore
from app.services.urls import UPLOADS_PATH

CACHE_FOREVER = "public, max-age=31536000, immutable"


class UploadsStaticFiles(StaticFiles):
    """Stored documents never change once written, so they can be cached by anyone."""

    async def get_response(self, path: str, scope):
        response = await super().get_response(path, scope)
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Cache-Control"] = CACHE_FOREVER
        return response


def _register_error_handlers(app: FastAPI):
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if isinstance(exc, ApiError):
            return JSONResponse(error_body(exc.detail), status_code=exc.status_code)
        if exc.status_code in (404, 405):
            return JSONResponse(error_body(ERR_ROUTE_NOT_FOUND), status_code=404)
        return JSONResponse(error_body(str(exc.detail)), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logging.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
        # an upload whose arquivo is not a file part counts as having no file
        if request.method == "POST" and request.url.path.rstrip("/") == "/api/notas":
            return JSONResponse(error_body(ERR_UPLOAD_FIELDS), status_code=400)
        return JSONResponse(error_body(ERR_BAD_REQUEST), status_code=400)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logging.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(error_body(ERR_INTERNAL), status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(str(settings.LOG_DIR), settings.LOG_LEVEL)

    uploads = UploadStore(settings.UPLOAD_DIR)
    index = IndexStore(settings.INDEX_FILE)
    uploads.ensure()
    index.ensure()

    app = FastAPI(title="Notas Upload", version="1.0.0")
    app.state.settings = settings
    app.state.uploads = uploads
    app.state.index = index

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        logging.info(f"{request.method} {request.url.path} {response.status_code} - {elapsed:.1f} ms")
        return response

    _register_error_handlers(app)

    # APIs
    app.include_router(health_router, tags=["health"])
    app.include_router(notas_router, prefix="/api", tags=["notas"])

    # Stored documents
    app.mount(UPLOADS_PATH, UploadsStaticFiles(directory=str(uploads.base)), name="uploads")

    return app


def run():
    import uvicorn

    settings = Settings()
    application = create_app(settings)
    logging.info(f"API on http://localhost:{settings.PORT}")
    logging.info(f"Uploads dir: {settings.UPLOAD_DIR}")
    uvicorn.run(application, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
