"""API response models."""

from typing import Optional
from pydantic import BaseModel, Field

from drive_browser.models.item import Breadcrumb, ItemView, SearchHit


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Error details (debug mode only)")


class BrowseResponse(BaseModel):
    """Folder contents with the breadcrumb chain leading to it."""

    items: list[ItemView] = Field(default_factory=list, description="Direct children, folders first")
    breadcrumbs: list[Breadcrumb] = Field(default_factory=list, description="Root-first ancestor chain")


class SearchResponse(BaseModel):
    """Name search results. Breadcrumbs are not computed for searches."""

    items: list[SearchHit] = Field(default_factory=list, description="Matching items in store order")
    breadcrumbs: list[Breadcrumb] = Field(default_factory=list, description="Always empty")


class SnapshotStatus(BaseModel):
    """Snapshot health information."""

    status: str = Field(..., description="'healthy', 'not_loaded' or 'error'")
    snapshot_path: str = Field(..., description="Configured snapshot file")
    item_count: Optional[int] = Field(None, description="Items in the store", ge=0)
    folder_count: Optional[int] = Field(None, description="Folders in the ancestor index", ge=0)
    version: Optional[str] = Field(None, description="Snapshot file fingerprint")
    error: Optional[str] = Field(None, description="Load error, if any")
