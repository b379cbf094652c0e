# src/cache/models.py - v1
"""Cache domain models: CacheOptions, ShortCodeEntry, TransactionHistoryRecord.

Persisted models serialize with camelCase field names so stored JSON stays
readable by every other consumer of the same store.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CacheOptions(BaseModel):
    """Per-deployment inputs of CacheStore."""

    parameters_contract: str = ""
    parameters_contract_start_block: int = Field(default=0, ge=0)


class ShortCodeEntry(BaseModel):
    """TTL-bounded payload stored under a short code.

    Only validUntil is required to judge liveness. Entries written by other
    producers may omit shortCode or carry a fractional validUntil.
    """

    model_config = ConfigDict(populate_by_name=True)

    short_code: str | None = Field(default=None, alias="shortCode")
    valid_until: int | float = Field(alias="validUntil")
    payload: Any = None

    def is_live(self, now: int) -> bool:
        """An entry is live while validUntil >= now (boundary inclusive)."""
        return self.valid_until >= now


class TransactionHistoryRecord(BaseModel):
    """A user's cached transaction history plus access metadata.

    Stored records are trusted as written: every field is optional and
    unknown fields are kept, so a partial record survives the lastRead
    re-stamp unchanged apart from lastRead itself.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    pubkey: str | None = None
    last_update: int | float | None = Field(default=None, alias="lastUpdate")
    last_read: int | float | None = Field(default=None, alias="lastRead")
    end_block: int | float | None = Field(default=None, alias="endBlock")
    transaction_history: Any = Field(default_factory=list, alias="transactionHistory")

    def to_json(self) -> str:
        # Absent fields stay absent; kept values of unexpected type serialize as-is.
        return self.model_dump_json(by_alias=True, exclude_unset=True, warnings=False)
