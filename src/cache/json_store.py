# src/cache/json_store.py — v2
"""JSON file-based content store (default CACHE_BACKEND=json).

One directory per partition, one JSON file per key under CACHE_ROOT.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from scripturai.cache.base_cache_store import BaseContentStore
from scripturai.core.models import CacheEntry, CachePayload

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


class JsonContentStore(BaseContentStore):
    """File-based content store using JSON files."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    async def get(self, key: str, partition: str) -> CacheEntry | None:
        """Retrieve the entry at (key, partition)."""
        path = self._entry_path(key, partition)
        if not path.exists():
            return None
        try:
            return CacheEntry.model_validate_json(path.read_text(encoding="utf-8"))
        except Exception as e:
            logger.warning("Failed to read cache entry %s/%s: %s", partition, key, e)
            return None

    async def upsert(self, key: str, partition: str, payload: CachePayload) -> None:
        """Write the entry, replacing any previous file atomically."""
        path = self._entry_path(key, partition)
        path.parent.mkdir(parents=True, exist_ok=True)
        entry = CacheEntry(key=key, partition=partition, payload=payload)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(entry.model_dump_json(indent=2), encoding="utf-8")
        os.replace(tmp, path)

    def _entry_path(self, key: str, partition: str) -> Path:
        """Return file path for an address."""
        return self._root / _safe_name(partition) / f"{_safe_name(key)}.json"


def _safe_name(value: str) -> str:
    return _UNSAFE.sub("_", value)
