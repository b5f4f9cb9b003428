from fastapi import Request

from app.core.config import Settings
from app.services.filestore import UploadStore
from app.services.index_store import IndexStore

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_upload_store(request: Request) -> UploadStore:
    return request.app.state.uploads

def get_index_store(request: Request) -> IndexStore:
    return request.app.state.index
