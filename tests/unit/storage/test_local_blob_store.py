# tests/unit/storage/test_local_blob_store.py — v1
"""Tests for storage/local_blob_store.py."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from scripturai.storage.local_blob_store import LocalBlobStore


class TestLocalBlobStore:
    @pytest.mark.asyncio
    async def test_upload_and_exists(self, tmp_path):
        store = LocalBlobStore(tmp_path)
        assert not await store.exists("KJV/John/3.png")
        await store.upload("KJV/John/3.png", b"png")
        assert await store.exists("KJV/John/3.png")
        assert (tmp_path / "KJV" / "John" / "3.png").read_bytes() == b"png"

    @pytest.mark.asyncio
    async def test_upload_overwrites(self, tmp_path):
        store = LocalBlobStore(tmp_path)
        await store.upload("a.png", b"one")
        await store.upload("a.png", b"two")
        assert (tmp_path / "a.png").read_bytes() == b"two"

    @pytest.mark.asyncio
    async def test_last_modified_is_utc(self, tmp_path):
        store = LocalBlobStore(tmp_path)
        await store.upload("a.png", b"x")
        modified = await store.get_last_modified("a.png")
        assert modified.tzinfo == timezone.utc
        assert abs((datetime.now(timezone.utc) - modified).total_seconds()) < 60

    def test_file_uri_by_default(self, tmp_path):
        url = LocalBlobStore(tmp_path).get_url("KJV/John/3.png")
        assert url.startswith("file://")
        assert url.endswith("KJV/John/3.png")

    def test_public_base_url(self, tmp_path):
        store = LocalBlobStore(tmp_path, public_base_url="https://cdn.example.org/")
        assert store.get_url("KJV/John/3.png") == "https://cdn.example.org/KJV/John/3.png"
