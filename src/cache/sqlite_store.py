# src/cache/sqlite_store.py — v2
"""SQLite-based content store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3. The (key, partition) primary key enforces one entry per
address; upserts replace the row.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from scripturai.cache.base_cache_store import BaseContentStore
from scripturai.core.models import CacheEntry, CachePayload

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS content_cache (
    key TEXT NOT NULL,
    partition TEXT NOT NULL,
    data TEXT NOT NULL,
    cached_at TEXT DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (key, partition)
);
"""


class SqliteContentStore(BaseContentStore):
    """SQLite-backed content store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str, partition: str) -> CacheEntry | None:
        cursor = self._conn.execute(
            "SELECT data FROM content_cache WHERE key = ? AND partition = ?",
            (key, partition),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        try:
            return CacheEntry.model_validate_json(row[0])
        except Exception as e:
            logger.warning("Failed to deserialize cache entry %s/%s: %s", partition, key, e)
            return None

    async def upsert(self, key: str, partition: str, payload: CachePayload) -> None:
        entry = CacheEntry(key=key, partition=partition, payload=payload)
        self._conn.execute(
            """INSERT OR REPLACE INTO content_cache (key, partition, data)
               VALUES (?, ?, ?)""",
            (key, partition, entry.model_dump_json()),
        )
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
