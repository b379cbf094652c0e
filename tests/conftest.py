# tests/conftest.py - v1
"""Shared test fixtures: in-memory store, fixed clock, configured CacheStore.

No external services required; failing stores are built with AsyncMock.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from swarmcache.cache.cache_store import CacheStore
from swarmcache.cache.models import CacheOptions
from swarmcache.store.base_store import KeyNotFoundError, StoreError
from swarmcache.store.memory_store import MemoryKeyValueStore

START_BLOCK = 4_500_000
CONTRACT = "0xparameterscontract"


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def options() -> CacheOptions:
    return CacheOptions(
        parameters_contract=CONTRACT,
        parameters_contract_start_block=START_BLOCK,
    )


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def cache(store, options, clock) -> CacheStore:
    return CacheStore(store, options, clock=clock)


def make_failing_store(
    get_error: Exception | None = None,
    put_error: Exception | None = None,
    initial: dict[str, str] | None = None,
) -> AsyncMock:
    """Store mock backed by a dict, raising the given errors on get/put."""
    data = dict(initial or {})
    mock = AsyncMock()

    async def _get(key):
        if get_error is not None:
            raise get_error
        if key not in data:
            raise KeyNotFoundError(key)
        return data[key]

    async def _put(key, value):
        if put_error is not None:
            raise put_error
        data[key] = value

    async def _delete(key):
        data.pop(key, None)

    mock.get.side_effect = _get
    mock.put.side_effect = _put
    mock.delete.side_effect = _delete
    mock.data = data
    return mock


@pytest.fixture
def broken_store() -> AsyncMock:
    """Store whose reads fail with a generic StoreError."""
    return make_failing_store(get_error=StoreError("disk on fire"))


@pytest.fixture
def failing_store():
    """Factory fixture: failing_store(get_error=..., put_error=..., initial=...)."""
    return make_failing_store
