"""
Redis cache for the resolved pair directory.

Lets several client processes on one host share a single pair list
instead of each hitting the exchange on cold start.
"""

import logging
from typing import Optional
import redis.asyncio as redis

from core.interfaces import IKeyValueStore

logger = logging.getLogger(__name__)


class RedisCache(IKeyValueStore):
    """Redis-backed string store"""

    def __init__(self, redis_url: str, key_prefix: str = "pairs:", default_ttl: int = 0):
        """
        Initialize Redis cache.

        Args:
            redis_url: Redis connection string (e.g., redis://localhost:6379/0)
            key_prefix: Namespace prepended to every key
            default_ttl: Default time-to-live in seconds (0 = no expiry)
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.default_ttl = default_ttl
        self._client: Optional[redis.Redis] = None
        logger.debug(f"RedisCache initialized for {redis_url}")

    async def connect(self):
        """Initialize Redis connection"""
        try:
            self._client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True
            )

            # Verify connection
            await self._client.ping()
            logger.info("Connected to Redis successfully")

        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self._client = None
            raise

    async def disconnect(self):
        """Close Redis connection"""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection closed")

    async def _ensure_connected(self) -> bool:
        if self._client is not None:
            return True
        try:
            await self.connect()
        except Exception:
            return False
        return True

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> Optional[str]:
        """Get value from cache"""
        if not await self._ensure_connected():
            logger.warning("Redis not connected, cache miss")
            return None

        try:
            value = await self._client.get(self._key(key))
            if value is not None:
                logger.debug(f"Cache HIT: {key}")
            else:
                logger.debug(f"Cache MISS: {key}")
            return value

        except Exception as e:
            logger.error(f"Redis GET error for {key}: {e}")
            return None

    async def set(
        self,
        key: str,
        value: str,
        ttl: Optional[int] = None
    ) -> bool:
        """Set value in cache with optional TTL"""
        if not await self._ensure_connected():
            logger.warning("Redis not connected, skipping cache set")
            return False

        try:
            ttl_seconds = ttl if ttl is not None else self.default_ttl

            if ttl_seconds > 0:
                await self._client.setex(self._key(key), ttl_seconds, value)
            else:
                await self._client.set(self._key(key), value)

            logger.debug(f"Cache SET: {key} (TTL={ttl_seconds}s)")
            return True

        except Exception as e:
            logger.error(f"Redis SET error for {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        """Delete key from cache"""
        if not await self._ensure_connected():
            return False

        try:
            await self._client.delete(self._key(key))
            logger.debug(f"Cache DELETE: {key}")
            return True

        except Exception as e:
            logger.error(f"Redis DELETE error for {key}: {e}")
            return False
