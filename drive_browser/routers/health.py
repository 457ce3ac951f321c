"""Health check router."""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from drive_browser.config import Settings
from drive_browser.models.response import SnapshotStatus
from drive_browser.routers.listing import get_app_settings, get_snapshot_provider
from drive_browser.services.snapshot_provider import SnapshotProvider

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check(settings: Settings = Depends(get_app_settings)):
    """
    Health check endpoint.

    Returns:
        Health status information
    """
    return {
        "status": "healthy",
        "service": settings.api_title,
        "version": settings.api_version,
        "redis_enabled": settings.redis_enabled
    }


@router.get("/health/snapshot", response_model=SnapshotStatus)
async def snapshot_health(
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    settings: Settings = Depends(get_app_settings)
):
    """
    Snapshot health check. Does not trigger a load.

    Returns:
        Snapshot load status; HTTP 503 if the load failed
    """
    snapshot_path = str(settings.get_absolute_snapshot_path())

    if provider.error is not None:
        status = SnapshotStatus(status="error", snapshot_path=snapshot_path, error=str(provider.error))
        return JSONResponse(status_code=503, content=status.model_dump())

    if not provider.loaded:
        return SnapshotStatus(status="not_loaded", snapshot_path=snapshot_path)

    snapshot = provider.get()
    return SnapshotStatus(
        status="healthy",
        snapshot_path=snapshot_path,
        item_count=snapshot.store.count(),
        folder_count=len(snapshot.index),
        version=snapshot.version
    )
