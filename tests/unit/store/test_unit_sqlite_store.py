# tests/unit/store/test_sqlite_store.py - v1
"""Tests for store/sqlite_store.py: full functional tests (stdlib sqlite3)."""

from __future__ import annotations

import pytest

from swarmcache.store import sqlite_store
from swarmcache.store.base_store import KeyNotFoundError, StoreError
from swarmcache.store.sqlite_store import SqliteKeyValueStore


@pytest.fixture
def store(tmp_path):
    kv = SqliteKeyValueStore(db_path=tmp_path / "nested" / "cache.db")
    yield kv
    kv.close()


class TestSqliteKeyValueStore:
    @pytest.mark.asyncio
    async def test_put_and_get(self, store):
        await store.put("key1", "value1")
        assert await store.get("key1") == "value1"

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        with pytest.raises(KeyNotFoundError):
            await store.get("nonexistent")

    @pytest.mark.asyncio
    async def test_overwrite(self, store):
        await store.put("key1", "a")
        await store.put("key1", "b")
        assert await store.get("key1") == "b"

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.put("key1", "v")
        await store.delete("key1")
        await store.delete("key1")
        with pytest.raises(KeyNotFoundError):
            await store.get("key1")

    @pytest.mark.asyncio
    async def test_iterate_bounds(self, store):
        for key in ["shortcode-b", "lastblock-x", "shortcode-a", "shortcodf"]:
            await store.put(key, key.upper())
        pairs = [p async for p in store.iterate(gte="shortcode-", lt="shortcode-\U0010ffff")]
        assert pairs == [("shortcode-a", "SHORTCODE-A"), ("shortcode-b", "SHORTCODE-B")]

    @pytest.mark.asyncio
    async def test_iterate_spans_batches(self, store, monkeypatch):
        monkeypatch.setattr(sqlite_store, "_SCAN_BATCH", 3)
        for i in range(10):
            await store.put(f"k{i:02d}", str(i))
        keys = [k async for k, _ in store.iterate(gte="k")]
        assert keys == [f"k{i:02d}" for i in range(10)]

    @pytest.mark.asyncio
    async def test_closed_connection_raises_store_error(self, tmp_path):
        kv = SqliteKeyValueStore(db_path=tmp_path / "c.db")
        kv.close()
        with pytest.raises(StoreError):
            await kv.get("key1")
        with pytest.raises(StoreError):
            await kv.put("key1", "v")

    @pytest.mark.asyncio
    async def test_in_memory_path(self):
        kv = SqliteKeyValueStore(db_path=":memory:")
        await kv.put("a", "1")
        assert await kv.get("a") == "1"
        kv.close()
