from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tinylink.api import health, links, pages, shortener
from tinylink.core.config import Settings, settings as default_settings
from tinylink.core.logging_config import configure_logging
from tinylink.db.Connection.database import Database
from tinylink.services.errors import StorageFailure
from tinylink.services.shortener import LinkRegistry

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the TinyLink application.

    The app owns ``database`` for its whole lifetime: tables are created on
    startup and the engine is disposed on shutdown. Passing a ``Database`` in
    lets callers (tests, scripts) pick the storage backend.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)
    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")
        database.create_all()
        database.verify_connection()
        yield
        logger.info("Shutting down gracefully...")
        database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="URL shortener with click counting",
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.registry = LinkRegistry(database)

    app.include_router(health.router)
    app.include_router(links.router)
    app.include_router(pages.router)

    # Must stay last
    app.include_router(shortener.router)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Malformed request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Malformed request body. Expected JSON with targetUrl and optional customCode."},
        )

    @app.exception_handler(StorageFailure)
    async def storage_failure_handler(request: Request, exc: StorageFailure):
        # cause already logged by the registry; keep it out of the response
        logger.error(f"Storage failure serving {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return app
