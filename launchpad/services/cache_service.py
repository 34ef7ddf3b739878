import json
from typing import Any, List

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from launchpad.core.config import settings
from launchpad.core.logging import LogContext
from launchpad.core.metrics import cache_hits, cache_misses
from launchpad.models.launch import Launch

logger = LogContext(__name__)

LAUNCHES_CACHE_KEY = "launches:all"


class CacheService:
    def __init__(self, redis_client: aioredis.Redis):
        self.redis = redis_client

    async def get_cached_data(self, key: str, default=None) -> Any | None:
        """
        Get data from cache with given key

        Args:
            key: The cache key
            default: Default value if key not found

        Returns:
            Deserialized data or default value
        """
        try:
            cached = await self.redis.get(key)
            if cached:
                return json.loads(cached)
            return default
        except (RedisError, ValueError) as e:
            logger.error(
                "Error retrieving from cache",
                extra={"key": key, "error": str(e), "error_type": e.__class__.__name__},
            )
            return default

    async def set_cached_data(self, key: str, data: Any, expire: int = 300) -> bool:
        """
        Set data in cache with the given key and expiration time

        Returns:
            True if successful, False otherwise
        """
        try:
            await self.redis.set(key, json.dumps(data), ex=expire)
            return True
        except (RedisError, TypeError) as e:
            logger.error(
                "Error setting cache",
                extra={"key": key, "error": str(e), "error_type": e.__class__.__name__},
            )
            return False

    # application specific cache methods

    async def get_launches(self) -> List[Launch] | None:
        """Get the cached upstream launch collection"""
        cached = await self.get_cached_data(LAUNCHES_CACHE_KEY)
        if cached is None:
            cache_misses.labels(cache_type="launches").inc()
            return None

        cache_hits.labels(cache_type="launches").inc()
        return [Launch.model_validate(launch) for launch in cached]

    async def set_launches(self, launches: List[Launch]) -> bool:
        """Cache the upstream launch collection"""
        return await self.set_cached_data(
            LAUNCHES_CACHE_KEY,
            [launch.model_dump() for launch in launches],
            expire=settings.LAUNCH_CACHE_TTL,
        )
