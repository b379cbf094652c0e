# src/store/base_store.py - v1
"""Abstract ordered key-value store interface.

Every cache in swarmcache talks to persistence through this contract only:
point reads and writes plus a key-ordered range scan.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator


class StoreError(Exception):
    """Raised when the underlying store fails."""

    not_found = False


class KeyNotFoundError(StoreError):
    """Raised by get() when the key is absent."""

    not_found = True

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key not found in store: {key!r}")


class BaseKeyValueStore(ABC):
    """Unified interface for ordered key-value backends."""

    @abstractmethod
    async def get(self, key: str) -> str:
        """Return the value stored at key.

        Raises:
            KeyNotFoundError: If the key is absent.
            StoreError: On any other backend failure.
        """

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Store value at key, overwriting any previous value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key. Succeeds whether or not the key existed."""

    @abstractmethod
    def iterate(
        self, gte: str | None = None, lt: str | None = None
    ) -> AsyncIterator[tuple[str, str]]:
        """Lazily yield (key, value) pairs in key order within [gte, lt)."""

    def close(self) -> None:
        """Release backend resources."""
