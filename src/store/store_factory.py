# src/store/store_factory.py - v1
"""Factory for key-value store instantiation."""

from __future__ import annotations

from swarmcache.config.settings import Settings
from swarmcache.store.base_store import BaseKeyValueStore


def create_store(settings: Settings | None = None) -> BaseKeyValueStore:
    """Instantiate the configured store backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseKeyValueStore implementation.
    """
    backend = "memory" if settings is None else settings.store_backend

    if backend == "memory":
        from swarmcache.store.memory_store import MemoryKeyValueStore
        return MemoryKeyValueStore()

    if backend == "sqlite":
        from swarmcache.store.sqlite_store import SqliteKeyValueStore
        return SqliteKeyValueStore(db_path=settings.store_path)

    if backend == "redis":
        from swarmcache.store.redis_store import RedisKeyValueStore
        if not settings.store_redis_url:
            raise ValueError(
                "STORE_REDIS_URL must be set when STORE_BACKEND=redis"
            )
        return RedisKeyValueStore(redis_url=settings.store_redis_url)

    raise ValueError(f"Unsupported store backend: {backend!r}")
