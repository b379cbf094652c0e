# tests/unit/cache/test_cache_store.py - v1
"""Tests for cache/cache_store.py: facade operations over one shared store."""

from __future__ import annotations

import json

import pytest

from swarmcache.cache.cache_store import CacheStore
from swarmcache.cache.errors import CacheMissError
from swarmcache.cache.models import CacheOptions
from swarmcache.store.base_store import StoreError
from swarmcache.store.memory_store import MemoryKeyValueStore


class TestShortCodes:
    @pytest.mark.asyncio
    async def test_save_read_delete(self, cache):
        await cache.save_data_to_short_code("12345", 60_000, {"to": "0xabc"})
        assert await cache.read_short_code("12345") == {"to": "0xabc"}
        await cache.delete_short_code("12345")
        with pytest.raises(CacheMissError):
            await cache.read_short_code("12345")

    @pytest.mark.asyncio
    async def test_expired_rejects(self, cache, clock):
        await cache.save_data_to_short_code("12345", 1_000, "p")
        clock.advance(2_000)
        with pytest.raises(CacheMissError):
            await cache.read_short_code("12345")

    @pytest.mark.asyncio
    async def test_get_short_codes_streams(self, cache):
        await cache.save_data_to_short_code("a", 1_000, 1)
        await cache.save_data_to_short_code("b", 1_000, 2)
        keys = [key async for key, _ in cache.get_short_codes()]
        assert keys == ["shortcode-a", "shortcode-b"]


class TestCheckpoint:
    @pytest.mark.asyncio
    async def test_fallback_then_set(self, cache, options):
        assert await cache.get_last_block() == options.parameters_contract_start_block
        await cache.set_last_block(4_500_999)
        assert await cache.get_last_block() == 4_500_999

    @pytest.mark.asyncio
    async def test_default_options(self):
        cache = CacheStore(MemoryKeyValueStore())
        assert cache.options == CacheOptions()
        assert await cache.get_last_block() == 0


class TestHashtags:
    @pytest.mark.asyncio
    async def test_empty_then_set(self, cache, store):
        assert await cache.get_hashtag_list() == []
        await cache.set_hashtag_list(json.dumps([{"name": "x"}]))
        assert await cache.get_hashtag_list() == [{"name": "x"}]

    @pytest.mark.asyncio
    async def test_indexer_synced_flag(self, cache, store):
        await cache.set_hashtag_indexer_synced(True)
        assert await store.get("hashtagindexer-synced") == "true"


class TestTransactionHistory:
    @pytest.mark.asyncio
    async def test_set_get_delete(self, cache, options):
        await cache.set_transaction_history("0xuser", 4_500_100, [{"hash": "0x1"}])
        record = await cache.get_transaction_history("0xuser")
        assert record.end_block == 4_500_100
        assert record.transaction_history == [{"hash": "0x1"}]

        await cache.delete_transaction_history("0xuser")
        record = await cache.get_transaction_history("0xuser")
        assert record.transaction_history == []
        assert record.end_block == options.parameters_contract_start_block - 1


class TestNamespaces:
    @pytest.mark.asyncio
    async def test_entities_use_disjoint_keys(self, cache, store, options):
        contract = options.parameters_contract
        await cache.save_data_to_short_code("x", 1_000, 1)
        await cache.set_last_block(7)
        await cache.set_hashtag_list("[]")
        await cache.set_transaction_history("0xuser", 1, [])

        keys = [key async for key, _ in store.iterate()]
        assert sorted(keys) == sorted([
            "shortcode-x",
            f"lastblock-{contract}",
            f"{contract}-hashtaglist",
            "0xuser-transactionHistory",
        ])

    @pytest.mark.asyncio
    async def test_store_failures_surface(self, broken_store, options):
        cache = CacheStore(broken_store, options)
        with pytest.raises(StoreError):
            await cache.get_last_block()
        with pytest.raises(StoreError):
            await cache.read_short_code("x")
