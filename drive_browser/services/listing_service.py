"""Browse and search over the loaded snapshot."""

import logging
import time
from typing import Optional, Union

from drive_browser.config import Settings
from drive_browser.models.item import ItemView, SearchHit
from drive_browser.models.response import BrowseResponse, SearchResponse
from drive_browser.services.breadcrumb_resolver import BreadcrumbResolver
from drive_browser.services.cache_service import CacheService
from drive_browser.services.snapshot_provider import DriveSnapshot

logger = logging.getLogger(__name__)


class ListingService:
    """Service answering browse and search requests."""

    def __init__(self, snapshot: DriveSnapshot, cache: CacheService, settings: Settings):
        """
        Initialize listing service.

        Args:
            snapshot: Loaded store and ancestor index
            cache: Cache service instance
            settings: Application settings
        """
        self.snapshot = snapshot
        self.cache = cache
        self.settings = settings
        self.resolver = BreadcrumbResolver(
            snapshot.index,
            root_id=settings.root_folder_id,
            root_label=settings.root_label
        )

    def resolve_folder_id(self, folder_id: Optional[str]) -> str:
        """Map an absent folder id or the root sentinel to the configured root id."""
        if not folder_id or folder_id == self.settings.root_sentinel:
            return self.settings.root_folder_id
        return folder_id

    async def query(
        self,
        folder_id: Optional[str] = None,
        q: Optional[str] = None
    ) -> Union[BrowseResponse, SearchResponse]:
        """
        Dispatch a request: a non-empty search term selects search mode.

        Args:
            folder_id: Folder to browse (ignored in search mode)
            q: Search term

        Returns:
            SearchResponse or BrowseResponse
        """
        if q:
            return await self.search(q)
        return await self.browse(folder_id)

    async def browse(self, folder_id: Optional[str] = None) -> BrowseResponse:
        """
        List a folder's direct children and its breadcrumb chain.

        Args:
            folder_id: Folder id, the root sentinel, or None for the root

        Returns:
            BrowseResponse
        """
        start_time = time.time()
        folder_id = self.resolve_folder_id(folder_id)

        cache_key = self.cache.build_key("browse", self.snapshot.version, folder_id)
        cached = await self.cache.get(cache_key)
        if cached:
            logger.debug(f"Browse cache hit: {folder_id}")
            return BrowseResponse(**cached)

        df = self.snapshot.store.children_of(folder_id)
        items = [ItemView(**row) for row in df.to_dicts()]
        breadcrumbs = self.resolver.resolve(folder_id)

        response = BrowseResponse(items=items, breadcrumbs=breadcrumbs)
        await self.cache.set(cache_key, response.model_dump(), ttl=self.settings.redis_ttl_browse)

        execution_time = time.time() - start_time
        logger.info(
            f"Browse {folder_id}: {len(items)} items, "
            f"{len(breadcrumbs)} breadcrumbs ({execution_time:.3f}s)"
        )
        return response

    async def search(self, term: str) -> SearchResponse:
        """
        Find items by case-insensitive name substring across the whole store.

        Args:
            term: Search term

        Returns:
            SearchResponse with at most `search_limit` items and no breadcrumbs
        """
        start_time = time.time()
        limit = self.settings.search_limit

        cache_key = self.cache.build_key("search", self.snapshot.version, str(limit), term)
        cached = await self.cache.get(cache_key)
        if cached:
            logger.debug(f"Search cache hit: {term}")
            return SearchResponse(**cached)

        df = self.snapshot.store.search(term, limit=limit)
        items = [SearchHit(**row) for row in df.to_dicts()]

        response = SearchResponse(items=items)
        await self.cache.set(cache_key, response.model_dump(), ttl=self.settings.redis_ttl_search)

        execution_time = time.time() - start_time
        logger.info(f"Search completed: {term!r} - {len(items)} results ({execution_time:.3f}s)")
        return response
