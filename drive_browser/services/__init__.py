"""Service layer for the Drive Browser."""

from drive_browser.services.cache_service import CacheService
from drive_browser.services.breadcrumb_resolver import BreadcrumbResolver
from drive_browser.services.snapshot_provider import SnapshotProvider, DriveSnapshot
from drive_browser.services.listing_service import ListingService

__all__ = ["CacheService", "BreadcrumbResolver", "SnapshotProvider", "DriveSnapshot", "ListingService"]
