"""
Redis cache for the public venue listing.

Caching is optional: until ``init_cache()`` reaches a Redis server every read
misses and every write is dropped, so the service runs uncached.
"""

import json
import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from .config import get_settings

logger = logging.getLogger(__name__)


class CacheKeyBuilder:
    """Cache key names."""

    @staticmethod
    def public_venues() -> str:
        return "venues:public"


class CacheTTL:
    """Cache TTLs in seconds."""

    PUBLIC_VENUES = 300


class RedisCache:
    """JSON values in Redis; a no-op while no client is connected."""

    def __init__(self):
        self.client: Optional[Redis] = None
        self.pool: Optional[redis.ConnectionPool] = None

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def initialize(self) -> None:
        """Connect to Redis, or leave caching disabled if it is unreachable."""
        settings = get_settings()
        self.pool = redis.ConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.redis_max_connections,
            retry_on_timeout=True,
            health_check_interval=30
        )
        self.client = Redis(connection_pool=self.pool)

        try:
            await self.client.ping()
        except RedisError as e:
            logger.warning("Redis unavailable, public venue cache disabled: %s", e)
            await self.close()
            return

        logger.info("Redis cache connected")

    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
        if self.pool:
            await self.pool.disconnect()
        self.client = None
        self.pool = None

    async def get(self, key: str) -> Optional[Any]:
        """Return the decoded value stored under ``key``, or None on a miss."""
        if not self.enabled:
            return None

        try:
            raw = await self.client.get(key)
        except RedisError as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return None

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Dropping undecodable cache entry %s", key)
            await self.delete(key)
            return None

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store ``value`` as JSON for ``ttl`` seconds."""
        if not self.enabled:
            return False

        try:
            await self.client.setex(key, ttl, json.dumps(value, default=str))
        except RedisError as e:
            logger.warning("Cache write failed for %s: %s", key, e)
            return False
        return True

    async def delete(self, key: str) -> None:
        if not self.enabled:
            return

        try:
            await self.client.delete(key)
        except RedisError as e:
            logger.warning("Cache delete failed for %s: %s", key, e)


cache = RedisCache()


async def init_cache() -> None:
    await cache.initialize()


async def close_cache() -> None:
    await cache.close()


def get_cache() -> RedisCache:
    return cache


class CacheInvalidator:
    """Drops cached reads made stale by venue writes."""

    @staticmethod
    async def invalidate_public_venues() -> None:
        await cache.delete(CacheKeyBuilder.public_venues())
        logger.debug("Invalidated public venue listing")
