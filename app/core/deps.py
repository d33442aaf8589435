# Dependencias para inyectar en endpoints; todo vive en app.state (ver create_app)
from fastapi import Request
from app.core.config import Settings
from app.db.store import MemStore
from app.services.chat import ChatResponder
from app.services.ingest import IngestionPipeline
from app.services.storage import ObjectStorageService

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_store(request: Request) -> MemStore:
    return request.app.state.store

def get_storage(request: Request) -> ObjectStorageService:
    return request.app.state.storage

def get_pipeline(request: Request) -> IngestionPipeline:
    return request.app.state.pipeline

def get_responder(request: Request) -> ChatResponder:
    return request.app.state.responder
