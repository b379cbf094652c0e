# src/store/memory_store.py - v1
"""In-process ordered key-value store (STORE_BACKEND=memory).

Keeps a sorted key list next to a dict so range scans come out in key order.
Nothing is persisted across processes.
"""

from __future__ import annotations

import bisect
from typing import AsyncIterator

from swarmcache.store.base_store import BaseKeyValueStore, KeyNotFoundError


class MemoryKeyValueStore(BaseKeyValueStore):
    """Ordered dict-backed store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = {}
        self._keys: list[str] = []
        for key, value in (initial or {}).items():
            self._insert(key, value)

    async def get(self, key: str) -> str:
        try:
            return self._data[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    async def put(self, key: str, value: str) -> None:
        self._insert(key, value)

    async def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._keys.pop(bisect.bisect_left(self._keys, key))

    async def iterate(
        self, gte: str | None = None, lt: str | None = None
    ) -> AsyncIterator[tuple[str, str]]:
        start = 0 if gte is None else bisect.bisect_left(self._keys, gte)
        # Snapshot so writes during iteration do not shift positions
        keys = list(self._keys[start:])
        for key in keys:
            if lt is not None and key >= lt:
                break
            if key in self._data:
                yield key, self._data[key]

    def __len__(self) -> int:
        return len(self._keys)

    def _insert(self, key: str, value: str) -> None:
        if key not in self._data:
            bisect.insort(self._keys, key)
        self._data[key] = value
