"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from neonest.api.v1 import api_router
from neonest.core.config import Settings, get_settings
from neonest.core.exceptions import (
    InvalidDateError,
    NotFoundError,
    StorageError,
    UnknownMilestoneError,
)
from neonest.store.base import LocalRecordStore
from neonest.store.memory import InMemoryRecordStore

logger = logging.getLogger(__name__)


def build_record_store(settings: Settings) -> LocalRecordStore:
    """Record store for the configured backend."""
    if settings.storage_backend == "memory":
        return InMemoryRecordStore()
    # Imported here so the memory backend never creates a database engine
    from neonest.db.session import async_session_maker
    from neonest.store.database import DatabaseRecordStore

    return DatabaseRecordStore(async_session_maker)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create the record store unless one was injected; shutdown: dispose the engine."""
    settings = get_settings()
    owns_store = getattr(app.state, "record_store", None) is None
    if owns_store:
        app.state.record_store = build_record_store(settings)
    yield
    if owns_store and settings.storage_backend == "database":
        from neonest.db.session import engine

        await engine.dispose()


def _register_error_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses."""

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(InvalidDateError)
    async def invalid_date(request: Request, exc: InvalidDateError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(UnknownMilestoneError)
    async def unknown_milestone(request: Request, exc: UnknownMilestoneError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        logger.error("Record store failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": "Record store unavailable"})


def create_application(record_store: LocalRecordStore | None = None) -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.record_store = record_store

    # CORS: allow everything in debug, localhost in development, CORS_ORIGINS env otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:8081", "http://127.0.0.1:8081"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
