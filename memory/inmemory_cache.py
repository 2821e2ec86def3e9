"""
In-memory key-value cache.

Process-lifetime store behind the pair directory. Nothing survives a
restart, so every cold start resolves pairs again; use the file or
Redis store when that matters.
"""

import logging
import time
from typing import Dict, Optional, Any
from dataclasses import dataclass

from core.interfaces import IKeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Single cache entry with optional TTL tracking."""
    value: str
    expires_at: Optional[float] = None


class InMemoryCache(IKeyValueStore):
    """
    Simple in-memory string cache.

    Entries never expire unless a TTL is given; pair freshness is decided
    by the directory from its own stored timestamp.
    """

    def __init__(self, default_ttl: Optional[int] = None):
        """
        Initialize in-memory cache.

        Args:
            default_ttl: Default time-to-live in seconds (default: no expiry)
        """
        self.default_ttl = default_ttl
        self._cache: Dict[str, CacheEntry] = {}
        self._stats = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "deletes": 0
        }
        logger.debug(f"InMemoryCache initialized with TTL={default_ttl}")

    def _get_timestamp(self) -> float:
        """Get current timestamp."""
        return time.time()

    def _is_expired(self, entry: CacheEntry) -> bool:
        """Check if a cache entry has expired."""
        return entry.expires_at is not None and self._get_timestamp() > entry.expires_at

    async def get(self, key: str) -> Optional[str]:
        """Get value from cache."""
        entry = self._cache.get(key)

        if entry is None:
            self._stats["misses"] += 1
            logger.debug(f"Cache MISS: {key}")
            return None

        if self._is_expired(entry):
            del self._cache[key]
            self._stats["misses"] += 1
            logger.debug(f"Cache EXPIRED: {key}")
            return None

        self._stats["hits"] += 1
        logger.debug(f"Cache HIT: {key}")
        return entry.value

    async def set(
        self,
        key: str,
        value: str,
        ttl: Optional[int] = None
    ) -> bool:
        """Set value in cache with optional TTL."""
        effective_ttl = ttl if ttl is not None else self.default_ttl
        expires_at = None
        if effective_ttl is not None:
            expires_at = self._get_timestamp() + effective_ttl

        self._cache[key] = CacheEntry(value=value, expires_at=expires_at)
        self._stats["sets"] += 1
        logger.debug(f"Cache SET: {key} (TTL={effective_ttl})")
        return True

    async def delete(self, key: str) -> bool:
        """Delete value from cache."""
        if key in self._cache:
            del self._cache[key]
            self._stats["deletes"] += 1
            logger.debug(f"Cache DELETE: {key}")
            return True
        return False

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        return {
            "type": "in-memory",
            "total_entries": len(self._cache),
            **self._stats,
            "hit_rate": (
                self._stats["hits"] / max(1, self._stats["hits"] + self._stats["misses"])
            ),
        }
