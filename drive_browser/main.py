"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from drive_browser.config import Settings, get_settings
from drive_browser.database.item_store import LoadError
from drive_browser.models.response import ErrorResponse
from drive_browser.routers import health, listing
from drive_browser.services.cache_service import CacheService
from drive_browser.services.snapshot_provider import SnapshotProvider

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (defaults to the cached instance)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Drive Browser API")
        logger.info(f"Snapshot path: {settings.get_absolute_snapshot_path()}")
        logger.info(f"Root folder: {settings.root_folder_id}")
        logger.info(f"Redis enabled: {settings.redis_enabled}")

        if settings.eager_load:
            try:
                app.state.snapshot_provider.get()
            except LoadError:
                logger.warning("Eager snapshot load failed; requests will return server errors until restart")

        yield

        logger.info("Shutting down Drive Browser API")
        app.state.snapshot_provider.close()
        await app.state.cache.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=settings.api_description,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.snapshot_provider = SnapshotProvider(settings)
    app.state.cache = CacheService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(listing.router, prefix="/api/search", tags=["Listing"])

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        payload = ErrorResponse(
            error=settings.error_message,
            detail=str(exc) if settings.debug else None
        )
        return JSONResponse(status_code=500, content=payload.model_dump(exclude_none=True))

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "description": settings.api_description,
            "docs": "/docs",
            "health": "/health"
        }

    return app


# Configure logging
_settings = get_settings()
logging.basicConfig(
    level=_settings.log_level,
    format=_settings.log_format
)

app = create_app(_settings)
