# src/cache/transaction_history.py - v1
"""Per-user transaction history with read-through re-stamping.

Every read refreshes lastRead and writes the record back. The write-back is
best-effort: its failure is logged and the read still resolves. Read and
write-back are two independent store calls, so concurrent reads of the same
pubkey race on lastRead and the last write wins.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from pydantic import ValidationError

from swarmcache.cache.keys import now_ms, transaction_history_key
from swarmcache.cache.models import CacheOptions, TransactionHistoryRecord
from swarmcache.logging.context import log_context
from swarmcache.store.base_store import BaseKeyValueStore, KeyNotFoundError

logger = logging.getLogger(__name__)


class TransactionHistoryCache:
    """Read, write and delete TransactionHistoryRecords keyed by pubkey."""

    def __init__(
        self,
        store: BaseKeyValueStore,
        options: CacheOptions,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._store = store
        self._options = options
        self._clock = clock

    async def set(
        self, pubkey: str, end_block: int, transaction_history: list[Any]
    ) -> None:
        key = transaction_history_key(pubkey)
        now = self._clock()
        record = TransactionHistoryRecord(
            pubkey=pubkey,
            last_update=now,
            last_read=now,
            end_block=end_block,
            transaction_history=transaction_history,
        )
        value = record.to_json()
        logger.info("Storing %s at %s", value, key)
        await self._store.put(key, value)

    async def get(self, pubkey: str) -> TransactionHistoryRecord:
        """Return the user's record, synthesizing an empty one when needed.

        Branches:
            not found        -> default record, nothing written
            parses           -> stored record, lastRead refreshed and written back
            does not parse   -> default record, written back
            other failure    -> StoreError propagates
        """
        with log_context(pubkey=pubkey):
            logger.debug("Getting history for %s", pubkey)
            key = transaction_history_key(pubkey)
            try:
                raw = await self._store.get(key)
            except KeyNotFoundError:
                logger.info("key %s not found (yet) in DB.", key)
                return self.empty_record(pubkey)

            record = self._parse(pubkey, raw)
            record.last_read = self._clock()
            try:
                await self._store.put(key, record.to_json())
            except Exception as exc:
                logger.error("Could not update lastRead value because: %s", exc)
            return record

    async def delete(self, pubkey: str) -> None:
        await self._store.delete(transaction_history_key(pubkey))

    def empty_record(self, pubkey: str) -> TransactionHistoryRecord:
        """Default record covering nothing up to the block before the start block."""
        now = self._clock()
        return TransactionHistoryRecord(
            pubkey=pubkey,
            last_update=now,
            last_read=now,
            end_block=self._options.parameters_contract_start_block - 1,
            transaction_history=[],
        )

    def _parse(self, pubkey: str, raw: str) -> TransactionHistoryRecord:
        logger.debug("Going to parse %s", raw)
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(
                "Cannot parse transactionHistory data from DB for %s. Data: %s. Error: %s",
                pubkey,
                raw,
                e,
            )
            return self.empty_record(pubkey)
        if not data or not isinstance(data, dict):
            logger.error(
                "Unusable transactionHistory data from DB for %s. Data: %s", pubkey, raw
            )
            return self.empty_record(pubkey)

        data.setdefault("pubkey", pubkey)
        try:
            return TransactionHistoryRecord.model_validate(data)
        except ValidationError as e:
            # Unexpected field types are kept as stored rather than discarded.
            logger.warning("Keeping unvalidated transactionHistory for %s: %s", pubkey, e)
            return TransactionHistoryRecord.model_construct(**data)
