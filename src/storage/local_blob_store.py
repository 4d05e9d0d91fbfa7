# src/storage/local_blob_store.py — v1
"""Local filesystem blob store (default backend)."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

from scripturai.storage.base_blob_store import BaseBlobStore


class LocalBlobStore(BaseBlobStore):
    """Store blobs as files below a root directory."""

    def __init__(self, root: str | Path, public_base_url: str = "") -> None:
        """Initialize with a root directory.

        Args:
            root: Directory all blob paths are relative to.
            public_base_url: Prefix for URLs (e.g. a static file server).
                Empty means ``file://`` URIs.
        """
        self._root = Path(root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._public_base_url = public_base_url.rstrip("/")

    def _resolve(self, path: str) -> Path:
        return self._root / path

    async def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    async def get_last_modified(self, path: str) -> datetime:
        mtime = self._resolve(path).stat().st_mtime
        return datetime.fromtimestamp(mtime, tz=timezone.utc)

    async def upload(self, path: str, data: bytes, content_type: str = "image/png") -> None:
        p = self._resolve(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp = p.with_name(p.name + ".tmp")
        tmp.write_bytes(data)
        os.replace(tmp, p)

    def get_url(self, path: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{path}"
        return self._resolve(path).resolve().as_uri()
