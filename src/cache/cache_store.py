# src/cache/cache_store.py - v1
"""CacheStore: one store handle, four independent caches.

The four caches share nothing but the store and live in disjoint key
namespaces. CacheStore keeps no state across calls besides its options.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Callable

from swarmcache.cache.block_checkpoint import BlockCheckpoint
from swarmcache.cache.hashtags import HashtagListCache
from swarmcache.cache.keys import now_ms
from swarmcache.cache.models import CacheOptions, TransactionHistoryRecord
from swarmcache.cache.short_codes import ShortCodeCache
from swarmcache.cache.transaction_history import TransactionHistoryCache
from swarmcache.store.base_store import BaseKeyValueStore


class CacheStore:
    """Facade over the short code, checkpoint, hashtag and history caches.

    Args:
        store: Shared key-value store handle.
        options: Tracked contract and its start block.
        clock: Returns current time in epoch milliseconds.
    """

    def __init__(
        self,
        store: BaseKeyValueStore,
        options: CacheOptions | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.store = store
        self.options = options or CacheOptions()
        self.short_codes = ShortCodeCache(store, clock=clock)
        self.checkpoint = BlockCheckpoint(store, self.options)
        self.hashtags = HashtagListCache(store, self.options)
        self.transaction_history = TransactionHistoryCache(
            store, self.options, clock=clock
        )

    # --- Short codes ---

    async def read_short_code(self, short_code: str) -> Any:
        return await self.short_codes.read(short_code)

    async def save_data_to_short_code(
        self, short_code: str, validity_ms: int, payload: Any
    ) -> None:
        await self.short_codes.save(short_code, validity_ms, payload)

    async def delete_short_code(self, short_code: str) -> None:
        await self.short_codes.delete(short_code)

    def get_short_codes(self) -> AsyncIterator[tuple[str, str]]:
        return self.short_codes.list_all()

    # --- Block checkpoint ---

    async def get_last_block(self) -> int:
        return await self.checkpoint.get()

    async def set_last_block(self, block_number: int) -> None:
        await self.checkpoint.set(block_number)

    # --- Hashtags ---

    async def get_hashtag_list(self) -> list[Any]:
        return await self.hashtags.get()

    async def set_hashtag_list(self, serialized_list: str | list[Any]) -> None:
        await self.hashtags.set(serialized_list)

    async def set_hashtag_indexer_synced(self, synced: bool) -> None:
        await self.hashtags.set_indexer_synced(synced)

    # --- Transaction history ---

    async def get_transaction_history(self, pubkey: str) -> TransactionHistoryRecord:
        return await self.transaction_history.get(pubkey)

    async def set_transaction_history(
        self, pubkey: str, end_block: int, transaction_history: list[Any]
    ) -> None:
        await self.transaction_history.set(pubkey, end_block, transaction_history)

    async def delete_transaction_history(self, pubkey: str) -> None:
        await self.transaction_history.delete(pubkey)
