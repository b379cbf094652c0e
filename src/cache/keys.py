# src/cache/keys.py - v1
"""Key namespacing and clock helpers shared by all caches.

The key layout is a compatibility contract with existing stores: never
change these formats.
"""

from __future__ import annotations

import time

SHORT_CODE_PREFIX = "shortcode-"
LAST_BLOCK_PREFIX = "lastblock-"
HASHTAG_LIST_SUFFIX = "-hashtaglist"
TRANSACTION_HISTORY_SUFFIX = "-transactionHistory"
HASHTAG_INDEXER_SYNCED_KEY = "hashtagindexer-synced"


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def short_code_key(short_code: str) -> str:
    return f"{SHORT_CODE_PREFIX}{short_code}"


def last_block_key(contract: str) -> str:
    return f"{LAST_BLOCK_PREFIX}{contract}"


def hashtag_list_key(contract: str) -> str:
    return f"{contract}{HASHTAG_LIST_SUFFIX}"


def transaction_history_key(pubkey: str) -> str:
    return f"{pubkey}{TRANSACTION_HISTORY_SUFFIX}"
