"""Redis caching service."""

import json
import logging
from typing import Any, Optional
import redis.asyncio as redis

from drive_browser.config import Settings, get_settings

logger = logging.getLogger(__name__)


class CacheService:
    """Redis-based cache for listing responses."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize cache service.

        Args:
            settings: Application settings (defaults to the cached instance)
        """
        self.settings = settings or get_settings()
        self.client: Optional[redis.Redis] = None
        self.enabled = self.settings.redis_enabled

        if self.enabled:
            try:
                self.client = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    decode_responses=True
                )
                logger.info(f"Redis cache initialized: {self.settings.redis_host}:{self.settings.redis_port}")
            except Exception as e:
                logger.warning(f"Could not initialize Redis, caching disabled: {e}")
                self.enabled = False
                self.client = None

    async def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        if not self.enabled or not self.client:
            return None

        try:
            value = await self.client.get(key)
            if value:
                logger.debug(f"Cache hit: {key}")
                return json.loads(value)
            else:
                logger.debug(f"Cache miss: {key}")
                return None
        except Exception as e:
            logger.error(f"Error getting from cache: {e}")
            return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None
    ) -> bool:
        """
        Set value in cache.

        Args:
            key: Cache key
            value: JSON-serializable value
            ttl: Time-to-live in seconds (None for default)

        Returns:
            True if successful
        """
        if not self.enabled or not self.client:
            return False

        try:
            ttl = ttl or self.settings.redis_ttl_default
            serialized = json.dumps(value, ensure_ascii=False)

            await self.client.setex(key, ttl, serialized)
            logger.debug(f"Cache set: {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"Error setting cache: {e}")
            return False

    def build_key(self, *parts: Optional[str]) -> str:
        """
        Build a cache key from parts.

        Args:
            *parts: Key components

        Returns:
            Formatted cache key
        """
        return ":".join("" if p is None else str(p) for p in parts)

    async def close(self):
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            logger.info("Redis connection closed")
