# src/cache/block_checkpoint.py - v1
"""Last processed block per tracked contract."""

from __future__ import annotations

import logging

from swarmcache.cache.keys import last_block_key
from swarmcache.cache.models import CacheOptions
from swarmcache.store.base_store import BaseKeyValueStore, KeyNotFoundError, StoreError

logger = logging.getLogger(__name__)


class BlockCheckpoint:
    """Checkpoint stored as plain integer text at lastblock-<contract>.

    When no checkpoint exists yet, the configured start block is the
    effective value. Only a definite not-found triggers that fallback.
    """

    def __init__(self, store: BaseKeyValueStore, options: CacheOptions) -> None:
        self._store = store
        self._options = options

    @property
    def key(self) -> str:
        return last_block_key(self._options.parameters_contract)

    async def get(self) -> int:
        try:
            raw = await self._store.get(self.key)
        except KeyNotFoundError:
            logger.info(
                "no lastblock in DB. Falling back to the startblock %d",
                self._options.parameters_contract_start_block,
            )
            return self._options.parameters_contract_start_block

        try:
            return int(raw)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Invalid checkpoint at {self.key}: {raw!r}") from e

    async def set(self, block_number: int) -> None:
        if block_number < 0:
            raise ValueError(f"block_number must be >= 0, got {block_number}")
        await self._store.put(self.key, str(int(block_number)))
