"""Pydantic models for API request/response."""

from drive_browser.models.item import ItemView, SearchHit, Breadcrumb
from drive_browser.models.response import (
    BrowseResponse,
    SearchResponse,
    SnapshotStatus,
    ErrorResponse
)

__all__ = [
    "ItemView",
    "SearchHit",
    "Breadcrumb",
    "BrowseResponse",
    "SearchResponse",
    "SnapshotStatus",
    "ErrorResponse",
]
