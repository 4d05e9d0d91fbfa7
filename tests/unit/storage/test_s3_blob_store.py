# tests/unit/storage/test_s3_blob_store.py — v1
"""Tests for storage/s3_blob_store.py — mocked boto3 client."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

boto3 = pytest.importorskip("boto3")

from botocore.exceptions import ClientError  # noqa: E402

from scripturai.storage.s3_blob_store import S3BlobStore  # noqa: E402


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def store(s3_client):
    with patch.object(boto3, "client", return_value=s3_client):
        return S3BlobStore(bucket="scripture", prefix="images", region="eu-west-1")


class TestS3BlobStore:
    @pytest.mark.asyncio
    async def test_exists_true(self, store, s3_client):
        assert await store.exists("KJV/John/3.png")
        s3_client.head_object.assert_called_once_with(Bucket="scripture", Key="images/KJV/John/3.png")

    @pytest.mark.asyncio
    async def test_exists_false_on_404(self, store, s3_client):
        s3_client.head_object.side_effect = ClientError({"Error": {"Code": "404"}}, "HeadObject")
        assert not await store.exists("KJV/John/3.png")

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, store, s3_client):
        s3_client.head_object.side_effect = ClientError({"Error": {"Code": "403"}}, "HeadObject")
        with pytest.raises(ClientError):
            await store.exists("KJV/John/3.png")

    @pytest.mark.asyncio
    async def test_last_modified(self, store, s3_client):
        s3_client.head_object.return_value = {"LastModified": datetime(2026, 1, 1, tzinfo=timezone.utc)}
        assert await store.get_last_modified("a.png") == datetime(2026, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_upload(self, store, s3_client):
        await store.upload("a.png", b"data")
        s3_client.put_object.assert_called_once_with(
            Bucket="scripture", Key="images/a.png", Body=b"data", ContentType="image/png"
        )

    def test_url(self, store):
        assert store.get_url("a.png") == "https://scripture.s3.eu-west-1.amazonaws.com/images/a.png"
