"""
Memory System

Key-value stores for the pair directory cache.
- memory: process lifetime only
- file: JSON file on disk (default)
- redis: shared Redis instance
"""

from memory.inmemory_cache import InMemoryCache
from memory.file_store import JsonFileStore


def create_store(backend: str = "file", **kwargs):
    """Factory: create a cache store by backend name.

    Args:
        backend: ``"file"`` (default), ``"memory"``, or ``"redis"``.
        **kwargs: ``file_path`` for the file store, ``redis_url`` for Redis.

    Returns:
        An IKeyValueStore implementation.
    """
    backend = backend.lower()
    if backend == "file":
        return JsonFileStore(kwargs.get("file_path", ".pair_cache.json"))
    elif backend == "memory":
        return InMemoryCache()
    elif backend == "redis":
        # Imported lazily so the redis client is only loaded when selected
        from memory.redis_cache import RedisCache
        return RedisCache(kwargs.get("redis_url", "redis://localhost:6379/0"))
    else:
        raise ValueError(f"Unknown cache backend: {backend!r}. Supported: file, memory, redis")


__all__ = ["create_store", "InMemoryCache", "JsonFileStore"]
