# src/store/redis_store.py - v1
"""Redis-based key-value store (STORE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Redis keeps no key order, so range scans collect matching keys with SCAN and
sort them client-side before streaming values.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from swarmcache.store.base_store import BaseKeyValueStore, KeyNotFoundError, StoreError

logger = logging.getLogger(__name__)


class RedisKeyValueStore(BaseKeyValueStore):
    """Redis-backed store for shared deployments."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._errors: type[Exception] = redis.RedisError

    async def get(self, key: str) -> str:
        try:
            value = self._client.get(key)
        except self._errors as e:
            raise StoreError(f"get({key!r}) failed: {e}") from e
        if value is None:
            raise KeyNotFoundError(key)
        return value

    async def put(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except self._errors as e:
            raise StoreError(f"put({key!r}) failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except self._errors as e:
            raise StoreError(f"delete({key!r}) failed: {e}") from e

    async def iterate(
        self, gte: str | None = None, lt: str | None = None
    ) -> AsyncIterator[tuple[str, str]]:
        try:
            keys = sorted(
                k for k in self._client.scan_iter()
                if (gte is None or k >= gte) and (lt is None or k < lt)
            )
        except self._errors as e:
            raise StoreError(f"range scan failed: {e}") from e

        for key in keys:
            try:
                value = self._client.get(key)
            except self._errors as e:
                raise StoreError(f"get({key!r}) failed: {e}") from e
            # Deleted between SCAN and GET
            if value is None:
                continue
            yield key, value

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
