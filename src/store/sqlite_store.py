# src/store/sqlite_store.py - v1
"""SQLite-based key-value store (STORE_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency. Keys live in a TEXT primary key
so range scans are served in key order from the index.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import AsyncIterator

from swarmcache.store.base_store import BaseKeyValueStore, KeyNotFoundError, StoreError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

_SCAN_BATCH = 100


class SqliteKeyValueStore(BaseKeyValueStore):
    """SQLite-backed ordered key-value store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = str(db_path)
        if self._db_path != ":memory:":
            path = Path(db_path).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)
            self._db_path = str(path)
        try:
            self._conn = sqlite3.connect(self._db_path)
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open store at {self._db_path}: {e}") from e

    async def get(self, key: str) -> str:
        try:
            row = self._conn.execute(
                "SELECT value FROM kv WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"get({key!r}) failed: {e}") from e
        if row is None:
            raise KeyNotFoundError(key)
        return row[0]

    async def put(self, key: str, value: str) -> None:
        try:
            self._conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                (key, value),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"put({key!r}) failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"delete({key!r}) failed: {e}") from e

    async def iterate(
        self, gte: str | None = None, lt: str | None = None
    ) -> AsyncIterator[tuple[str, str]]:
        """Stream rows in key order, fetching in small batches.

        Each batch resumes after the last key seen, so the scan never holds a
        cursor open across yields.
        """
        lower = gte
        inclusive = True
        while True:
            clauses: list[str] = []
            params: list[str | int] = []
            if lower is not None:
                clauses.append("key >= ?" if inclusive else "key > ?")
                params.append(lower)
            if lt is not None:
                clauses.append("key < ?")
                params.append(lt)
            where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
            params.append(_SCAN_BATCH)
            try:
                rows = self._conn.execute(
                    f"SELECT key, value FROM kv {where} ORDER BY key LIMIT ?",
                    params,
                ).fetchall()
            except sqlite3.Error as e:
                raise StoreError(f"range scan failed: {e}") from e

            for key, value in rows:
                yield key, value
            if len(rows) < _SCAN_BATCH:
                return
            lower = rows[-1][0]
            inclusive = False

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
