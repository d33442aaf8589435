from typing import Any, Optional
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, settings as default_settings
from app.core.logging import setup_logging
from app.db.store import MemStore
from app.middlewares.errors import register_error_handlers
from app.middlewares.logging import RequestLoggingMiddleware
from app.services.chat import ChatResponder
from app.services.ingest import IngestionPipeline
from app.services.storage import ObjectStorageService

from app.routers import health
from app.routers import bots as bots_router
from app.routers import training_data as training_data_router
from app.routers import objects as objects_router
from app.routers import integrations as integrations_router
from app.routers import conversations as conversations_router
from app.routers import dashboard as dashboard_router

load_dotenv()

def create_app(
    settings: Optional[Settings] = None,
    *,
    storage: Optional[ObjectStorageService] = None,
    llm_client: Optional[Any] = None,
) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(title="Bot Builder API")

    # CORS (ajustá orígenes en prod)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_error_handlers(app)

    # Estado del proceso: se crea una vez y se inyecta por Depends (app/core/deps.py)
    store = MemStore()
    storage = storage or ObjectStorageService(settings)
    app.state.settings = settings
    app.state.store = store
    app.state.storage = storage
    app.state.pipeline = IngestionPipeline.with_storage(store, settings, storage)
    app.state.responder = ChatResponder(store, settings, client=llm_client)

    # Routers
    app.include_router(health.router)
    app.include_router(bots_router.router)
    app.include_router(training_data_router.router)
    app.include_router(objects_router.router)
    app.include_router(integrations_router.router)
    app.include_router(conversations_router.router)
    app.include_router(dashboard_router.router)

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.pipeline.shutdown()
        await app.state.storage.aclose()

    return app

app = create_app()
