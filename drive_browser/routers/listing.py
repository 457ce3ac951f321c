"""Browse/search router."""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from drive_browser.config import Settings
from drive_browser.database.item_store import LoadError
from drive_browser.models.response import ErrorResponse
from drive_browser.services.cache_service import CacheService
from drive_browser.services.listing_service import ListingService
from drive_browser.services.snapshot_provider import SnapshotProvider

logger = logging.getLogger(__name__)
router = APIRouter()


def get_snapshot_provider(request: Request) -> SnapshotProvider:
    """Dependency to get the process-wide snapshot provider."""
    return request.app.state.snapshot_provider


def get_cache(request: Request) -> CacheService:
    """Dependency to get the shared cache service."""
    return request.app.state.cache


def get_app_settings(request: Request) -> Settings:
    """Dependency to get the settings the app was created with."""
    return request.app.state.settings


def error_response(exc: Exception, settings: Settings) -> JSONResponse:
    """Build the generic 500 payload."""
    payload = ErrorResponse(
        error=settings.error_message,
        detail=str(exc) if settings.debug else None
    )
    return JSONResponse(status_code=500, content=payload.model_dump(exclude_none=True))


@router.get("", response_model=dict)
async def list_items(
    folder_id: Optional[str] = Query(None, alias="folderId", description="Folder id, or ROOT for the root folder"),
    q: Optional[str] = Query(None, description="Search term; switches to search mode"),
    provider: SnapshotProvider = Depends(get_snapshot_provider),
    cache: CacheService = Depends(get_cache),
    settings: Settings = Depends(get_app_settings)
):
    """
    Browse a folder or search item names.

    Args:
        folder_id: Folder to browse (defaults to the root)
        q: Case-insensitive name substring; when present, search mode is used

    Returns:
        {"items": [...], "breadcrumbs": [...]}
    """
    try:
        # First call performs the blocking snapshot load.
        snapshot = await run_in_threadpool(provider.get)
        service = ListingService(snapshot, cache, settings)

        result = await service.query(folder_id=folder_id, q=q)
        return result.model_dump(by_alias=True)

    except LoadError as e:
        logger.error(f"Snapshot unavailable: {e}")
        return error_response(e, settings)
    except Exception as e:
        logger.error(f"Error in listing endpoint: {e}", exc_info=True)
        return error_response(e, settings)
