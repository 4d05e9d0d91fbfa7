# src/batch/ledger.py — v2
"""Durable scrape progress: processed units, batch offsets, failed items.

Each document is a small JSON file under the ledger directory, rewritten in
full (temp file + rename) after every mutation. A file that cannot be parsed
is treated as empty so a scrape can always proceed.

The failed-items list is guarded by one process-wide lock held for the whole
read-modify-write cycle, including a complete reprocessing pass.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import weakref
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

from pydantic import TypeAdapter, ValidationError

from scripturai.core.models import BookProgress, FailedItem, VerseRecord

logger = logging.getLogger(__name__)

PROCESSED_UNITS_FILE = "processed_units.json"
BATCH_PROGRESS_FILE = "batch_progress.json"
FAILED_ITEMS_FILE = "failed_items.json"

_FAILED_ITEMS = TypeAdapter(list[FailedItem])

# Process-wide; shared by every ledger instance running on the same loop.
_FAILURE_LOCKS: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock] = (
    weakref.WeakKeyDictionary()
)


def _failure_lock() -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    lock = _FAILURE_LOCKS.get(loop)
    if lock is None:
        lock = _FAILURE_LOCKS[loop] = asyncio.Lock()
    return lock


class LedgerEmptyError(Exception):
    """The failed-items ledger is missing or has no entries."""


class FailureBatch:
    """Snapshot of the failed-items list taken under the ledger lock."""

    def __init__(self, items: list[FailedItem]) -> None:
        self.items = items
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    def resolve(self) -> None:
        """Mark every item handled; the ledger is cleared on exit."""
        self._resolved = True


class ScraperProgressLedger:
    """File-backed progress and failure ledger for the scraper."""

    def __init__(self, ledger_dir: Path | str) -> None:
        self._dir = Path(ledger_dir).expanduser()
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._dir

    # --- batch progress ---

    def get_progress(self, unit_id: str) -> BookProgress | None:
        progress = self._read_json(BATCH_PROGRESS_FILE, default={})
        if not isinstance(progress, dict) or unit_id not in progress:
            return None
        try:
            return BookProgress(unit_id=unit_id, last_completed_batch_start=int(progress[unit_id]))
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed progress entry for %s", unit_id)
            return None

    def get_resume_offset(self, unit_id: str, batch_size: int = 100) -> int:
        """Offset of the first batch not yet completed (0 with no progress)."""
        progress = self.get_progress(unit_id)
        if progress is None:
            return 0
        return progress.last_completed_batch_start + batch_size

    def record_batch_complete(self, unit_id: str, batch_start: int) -> None:
        progress = self._progress_map()
        progress[unit_id] = batch_start
        self._write_json(BATCH_PROGRESS_FILE, progress)
        logger.debug("Recorded batch %d complete for %s", batch_start, unit_id)

    def clear_unit(self, unit_id: str) -> None:
        progress = self._progress_map()
        if progress.pop(unit_id, None) is not None:
            self._write_json(BATCH_PROGRESS_FILE, progress)

    # --- processed units ---

    def processed_units(self) -> list[str]:
        units = self._read_json(PROCESSED_UNITS_FILE, default=[])
        if not isinstance(units, list):
            logger.warning("%s is not a list; starting fresh", PROCESSED_UNITS_FILE)
            return []
        return [str(u) for u in units]

    def is_unit_complete(self, unit_id: str) -> bool:
        return unit_id in self.processed_units()

    def mark_unit_complete(self, unit_id: str) -> None:
        """Append to the processed list and drop the unit's batch progress."""
        units = self.processed_units()
        if unit_id not in units:
            units.append(unit_id)
            self._write_json(PROCESSED_UNITS_FILE, units)
        self.clear_unit(unit_id)
        logger.info("Marked %s as processed", unit_id)

    # --- failed items ---

    async def append_failure(self, verse: VerseRecord, reason: str) -> None:
        async with _failure_lock():
            items = self._load_failures()
            items.append(FailedItem(verse=verse, reason=reason))
            self._save_failures(items)
        logger.warning("Logged %s to the failure ledger: %s", verse.id, reason)

    async def read_failures(self) -> list[FailedItem]:
        async with _failure_lock():
            return self._load_failures()

    @asynccontextmanager
    async def failure_batch(self) -> AsyncIterator[FailureBatch]:
        """Hold the failure lock around a full reprocessing pass.

        The ledger is truncated on exit only if ``resolve()`` was called and
        the block did not raise.

        Raises:
            LedgerEmptyError: No failed items are recorded.
        """
        async with _failure_lock():
            items = self._load_failures()
            if not items:
                raise LedgerEmptyError(f"No failed items in {self._path(FAILED_ITEMS_FILE)}")
            batch = FailureBatch(items)
            yield batch
            if batch.resolved:
                self._save_failures([])
                logger.info("Cleared %d items from the failure ledger", len(items))

    def _load_failures(self) -> list[FailedItem]:
        path = self._path(FAILED_ITEMS_FILE)
        if not path.exists():
            return []
        try:
            return _FAILED_ITEMS.validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning("Unreadable failure ledger %s, starting fresh: %s", path, e)
            return []

    def _save_failures(self, items: list[FailedItem]) -> None:
        self._write_bytes(FAILED_ITEMS_FILE, _FAILED_ITEMS.dump_json(items, indent=2))

    # --- file helpers ---

    def _progress_map(self) -> dict[str, int]:
        progress = self._read_json(BATCH_PROGRESS_FILE, default={})
        if not isinstance(progress, dict):
            logger.warning("%s is not a mapping; starting fresh", BATCH_PROGRESS_FILE)
            return {}
        return progress

    def _path(self, name: str) -> Path:
        return self._dir / name

    def _read_json(self, name: str, default: Any) -> Any:
        path = self._path(name)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Unreadable ledger file %s, starting fresh: %s", path, e)
            return default

    def _write_json(self, name: str, data: Any) -> None:
        self._write_bytes(name, json.dumps(data, indent=2).encode("utf-8"))

    def _write_bytes(self, name: str, data: bytes) -> None:
        path = self._path(name)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_bytes(data)
        os.replace(tmp, path)
