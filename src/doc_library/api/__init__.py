import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from doc_library.api.errors import register_error_handlers
from doc_library.api.files import router as files_router
from doc_library.api.middleware import CatchAllExceptionMiddleware, RequestSizeLimitMiddleware
from doc_library.api.routers import register_all_routers
from doc_library.app.core.env import get_env
from doc_library.app.settings import AppSettings, LibrarySettings, get_app_settings, get_library_settings
from doc_library.documents import DemoMetrics, DocumentService, seed_sample_data
from doc_library.records import RecordStore
from doc_library.storage import StorageBackend, easy_storage

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_app(
        settings: Optional[LibrarySettings] = None,
        *,
        app_settings: Optional[AppSettings] = None,
        store: Optional[RecordStore] = None,
        storage: Optional[StorageBackend] = None,
        demo_metrics: Optional[DemoMetrics] = None,
) -> FastAPI:
    """Build the document-library application.

    Every collaborator can be injected; tests pass a fresh store and a
    ``MemoryBackend`` per case. Defaults come from settings.
    """
    settings = settings or get_library_settings()
    app_settings = app_settings or get_app_settings()
    store = RecordStore() if store is None else store
    storage = easy_storage(settings) if storage is None else storage
    service = DocumentService.from_settings(store, storage, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.prune_orphans_on_startup:
            await service.prune_orphans()
        if settings.seed_sample_data:
            await seed_sample_data(service)
        yield

    app = FastAPI(title=app_settings.name, version=app_settings.version, lifespan=lifespan)
    app.state.store = store
    app.state.documents = service
    app.state.demo_metrics = DemoMetrics() if demo_metrics is None else demo_metrics

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=settings.max_upload_bytes + settings.request_overhead_bytes,
    )
    app.add_middleware(CatchAllExceptionMiddleware)
    register_error_handlers(app)

    register_all_routers(app, base_package="doc_library.api.routers", prefix=API_PREFIX)
    app.include_router(files_router)

    @app.get("/ping", include_in_schema=False)
    async def ping():
        return {"status": "ok"}

    logger.info(f"{app_settings.version} version of {app_settings.name} initialized [env: {get_env()}]")
    return app


__all__ = ["API_PREFIX", "create_app"]
