# src/cache/hashtags.py - v1
"""Hashtag list per tracked contract, plus the indexer sync flag."""

from __future__ import annotations

import json
import logging
from typing import Any

from swarmcache.cache.keys import HASHTAG_INDEXER_SYNCED_KEY, hashtag_list_key
from swarmcache.cache.models import CacheOptions
from swarmcache.store.base_store import BaseKeyValueStore, KeyNotFoundError

logger = logging.getLogger(__name__)


class HashtagListCache:
    """Opaque serialized hashtag list stored at <contract>-hashtaglist.

    Missing or unparsable data reads back as an empty list.
    """

    def __init__(self, store: BaseKeyValueStore, options: CacheOptions) -> None:
        self._store = store
        self._options = options

    @property
    def key(self) -> str:
        return hashtag_list_key(self._options.parameters_contract)

    async def set(self, serialized_list: str | list[Any]) -> None:
        """Store the list. Strings are written verbatim, lists JSON-encoded."""
        if not isinstance(serialized_list, str):
            serialized_list = json.dumps(serialized_list)
        await self._store.put(self.key, serialized_list)

    async def get(self) -> list[Any]:
        key = self.key
        try:
            raw = await self._store.get(key)
        except KeyNotFoundError:
            logger.info("key %s not found (yet) in DB. Returning empty hashtag list", key)
            return []

        try:
            hashtags = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(
                "Cannot parse hashtag data from DB. Data: %s. Error: %s", raw, e
            )
            return []
        if not isinstance(hashtags, list):
            logger.error("Hashtag data at %s is not a list: %s", key, raw)
            return []
        return hashtags

    async def set_indexer_synced(self, synced: bool) -> None:
        await self._store.put(HASHTAG_INDEXER_SYNCED_KEY, json.dumps(bool(synced)))

    async def is_indexer_synced(self) -> bool:
        try:
            raw = await self._store.get(HASHTAG_INDEXER_SYNCED_KEY)
        except KeyNotFoundError:
            return False
        return raw.strip().lower() == "true"
