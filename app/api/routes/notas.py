# app/api/routes/notas.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from pydantic import BaseModel

from app.api.deps import get_index_store, get_settings, get_upload_store
from app.core.config import Settings
from app.core.errors import (
    ApiError,
    ERR_NOT_FOUND,
    ERR_NUMERO_REQUIRED,
    ERR_UPLOAD_FAILED,
    ERR_UPLOAD_FIELDS,
)
from app.services.filestore import FileTooLarge, UploadStore
from app.services.index_store import IndexStore, UploadRecord, now_ms
from app.services.resolver import find_nota
from app.services.urls import base_url, file_url

router = APIRouter()

class NotaResponse(BaseModel):
    ok: bool = True
    numero: str
    arquivo_url: str

class UploadResponse(BaseModel):
    ok: bool = True
    numeroEnvio: str
    data: Optional[str] = None
    arquivo_url: str


def _lookup(numero: Optional[str], request: Request, settings: Settings,
            index: IndexStore, uploads: UploadStore) -> NotaResponse:
    if not numero:
        raise ApiError(400, ERR_NUMERO_REQUIRED)
    found = find_nota(
        numero, index, uploads,
        build_url=lambda name: file_url(base_url(settings.PUBLIC_BASE_URL, request), name),
    )
    if found is None:
        raise ApiError(404, ERR_NOT_FOUND)
    logging.info(f"Nota {found.numero} resolved from {found.source}")
    return NotaResponse(numero=found.numero, arquivo_url=found.arquivo_url)


@router.get("/notas", response_model=NotaResponse)
def get_nota_by_query(
    request: Request,
    numero: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    index: IndexStore = Depends(get_index_store),
    uploads: UploadStore = Depends(get_upload_store),
):
    return _lookup(numero, request, settings, index, uploads)


@router.get("/notas/{numero:path}", response_model=NotaResponse)
def get_nota(
    numero: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    index: IndexStore = Depends(get_index_store),
    uploads: UploadStore = Depends(get_upload_store),
):
    return _lookup(numero, request, settings, index, uploads)


@router.post("/notas", response_model=UploadResponse)
async def create_nota(
    request: Request,
    numeroEnvio: Optional[str] = Form(None),
    data: Optional[str] = Form(None),
    arquivo: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    index: IndexStore = Depends(get_index_store),
    uploads: UploadStore = Depends(get_upload_store),
):
    numero = (numeroEnvio or "").strip()
    data = (data or "").strip() or None
    if not numero or arquivo is None:
        raise ApiError(400, ERR_UPLOAD_FIELDS)

    max_bytes = settings.MAX_FILE_BYTES
    too_large = ApiError(413, f"Arquivo excede o limite de {settings.MAX_FILE_MB:g} MB")
    if arquivo.size is not None and arquivo.size > max_bytes:
        raise too_large

    try:
        stored = await uploads.save(numero, arquivo.filename, arquivo, max_bytes)
        url = file_url(base_url(settings.PUBLIC_BASE_URL, request), stored)
        await index.append(UploadRecord(
            numero=numero,
            data=data,
            filename=stored,
            arquivo_url=url,
            timestamp=now_ms(),
        ))
    except FileTooLarge:
        logging.warning(f"Upload for {numero} rejected: larger than {max_bytes} bytes")
        raise too_large
    except Exception:
        logging.exception(f"Upload for {numero} failed")
        raise ApiError(500, ERR_UPLOAD_FAILED)
    finally:
        await arquivo.close()

    return UploadResponse(numeroEnvio=numero, data=data, arquivo_url=url)
