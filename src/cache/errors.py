# src/cache/errors.py - v1
"""Cache-level failures.

Every CacheMissError means "no usable value" to the caller. Subclasses only
exist so logs and tests can tell the cause apart. Store failures are not
CacheMissErrors; they surface as StoreError.
"""

from __future__ import annotations


class CacheMissError(Exception):
    """No usable value for the requested key."""

    not_found = False

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"No value for {key!r}")


class ShortCodeNotFoundError(CacheMissError):
    """The short code was never saved or has been deleted."""

    not_found = True

    def __init__(self, key: str) -> None:
        super().__init__(key, f"Key not found in store: {key!r}")


class CorruptDataError(CacheMissError):
    """Stored bytes could not be deserialized."""

    def __init__(self, key: str, reason: str) -> None:
        self.reason = reason
        super().__init__(key, f"Cannot parse data at {key!r}: {reason}")


class ShortCodeExpiredError(CacheMissError):
    """The entry exists but its validity window has passed."""

    def __init__(self, key: str, valid_until: int | float) -> None:
        self.valid_until = valid_until
        super().__init__(key, f"Entry at {key!r} expired at {valid_until}")
