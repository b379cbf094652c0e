# src/cache/short_codes.py - v1
"""Short code cache: TTL-bounded payloads with lazy expiry.

Expiry is only checked when an entry is read. Entries past their validity
window stay in the store until deleted or purged by purge_expired().
"""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Callable

from pydantic import ValidationError

from swarmcache.cache.errors import (
    CorruptDataError,
    ShortCodeExpiredError,
    ShortCodeNotFoundError,
)
from swarmcache.cache.keys import SHORT_CODE_PREFIX, now_ms, short_code_key
from swarmcache.cache.models import ShortCodeEntry
from swarmcache.store.base_store import BaseKeyValueStore, KeyNotFoundError

logger = logging.getLogger(__name__)


class ShortCodeCache:
    """Read, write and enumerate short code entries."""

    def __init__(
        self, store: BaseKeyValueStore, clock: Callable[[], int] = now_ms
    ) -> None:
        self._store = store
        self._clock = clock

    async def save(self, short_code: str, validity_ms: int, payload: Any) -> None:
        """Store payload under short_code, valid for validity_ms from now."""
        key = short_code_key(short_code)
        entry = ShortCodeEntry(
            short_code=short_code,
            valid_until=self._clock() + validity_ms,
            payload=payload,
        )
        value = entry.model_dump_json(by_alias=True)
        logger.info("Storing %s at %s", value, key)
        try:
            await self._store.put(key, value)
        except Exception as exc:
            logger.error("Could not store %s: %s", key, exc)
            raise

    async def read(self, short_code: str) -> Any:
        """Return the live payload for short_code.

        Raises:
            ShortCodeNotFoundError: Never saved, or deleted.
            CorruptDataError: Stored value cannot be parsed.
            ShortCodeExpiredError: validUntil is in the past.
            StoreError: Any other store failure.
        """
        logger.info("readShortCode start %s", short_code)
        key = short_code_key(short_code)
        try:
            raw = await self._store.get(key)
        except KeyNotFoundError as exc:
            logger.info("key %s not found (yet) in DB.", key)
            raise ShortCodeNotFoundError(key) from exc

        entry = self._parse(key, raw)
        if not entry.is_live(self._clock()):
            logger.info("data at %s has expired", key)
            raise ShortCodeExpiredError(key, entry.valid_until)

        logger.info("data at %s is OK", key)
        return entry.payload

    async def delete(self, short_code: str) -> None:
        key = short_code_key(short_code)
        logger.debug("Deleting %s", key)
        await self._store.delete(key)

    async def list_all(self) -> AsyncIterator[tuple[str, str]]:
        """Stream raw (key, value) pairs of every stored short code.

        Expired and corrupt entries are included. Restart by calling again.
        """
        # Keys sharing the prefix are contiguous in key order.
        async for key, value in self._store.iterate(gte=SHORT_CODE_PREFIX):
            if not key.startswith(SHORT_CODE_PREFIX):
                break
            yield key, value

    async def purge_expired(self) -> int:
        """Delete expired or unparsable entries, returning how many were removed."""
        now = self._clock()
        stale: list[str] = []
        async for key, value in self.list_all():
            try:
                entry = self._parse(key, value)
            except CorruptDataError:
                stale.append(key)
                continue
            if not entry.is_live(now):
                stale.append(key)

        for key in stale:
            await self._store.delete(key)
        if stale:
            logger.info("Purged %d stale short codes", len(stale))
        return len(stale)

    @staticmethod
    def _parse(key: str, raw: str) -> ShortCodeEntry:
        try:
            return ShortCodeEntry.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.error("Cannot parse short code data at %s. Data: %s", key, raw)
            raise CorruptDataError(key, str(e)) from e
