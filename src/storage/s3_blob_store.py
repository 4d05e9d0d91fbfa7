# src/storage/s3_blob_store.py — v1
"""S3-compatible blob store (BLOB_STORE_TYPE=s3).

Supports AWS S3, MinIO, and other S3-compatible storage.
Requires 'boto3' package: pip install boto3.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from scripturai.storage.base_blob_store import BaseBlobStore

logger = logging.getLogger(__name__)


class S3BlobStore(BaseBlobStore):
    """Blobs as objects in an S3 bucket."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "scripturai/",
        region: str | None = None,
        endpoint_url: str | None = None,
        public_base_url: str = "",
    ) -> None:
        """Initialize S3 blob store.

        Args:
            bucket: S3 bucket name.
            prefix: Key prefix for all objects (e.g. "scripturai/").
            region: AWS region (optional, uses boto3 default if not set).
            endpoint_url: Custom endpoint for MinIO/compatible storage.
            public_base_url: URL prefix (e.g. CDN); defaults to the bucket URL.
        """
        try:
            import boto3
        except ImportError as e:
            raise ImportError(
                "boto3 package required for S3 blob store: pip install boto3"
            ) from e

        kwargs: dict = {}
        if region:
            kwargs["region_name"] = region
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url

        self._s3 = boto3.client("s3", **kwargs)
        self._bucket = bucket
        self._prefix = prefix.rstrip("/") + "/" if prefix else ""
        self._public_base_url = public_base_url.rstrip("/")
        self._region = region

    def _full_key(self, path: str) -> str:
        return f"{self._prefix}{path}"

    async def exists(self, path: str) -> bool:
        from botocore.exceptions import ClientError

        try:
            self._s3.head_object(Bucket=self._bucket, Key=self._full_key(path))
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise

    async def get_last_modified(self, path: str) -> datetime:
        head = self._s3.head_object(Bucket=self._bucket, Key=self._full_key(path))
        modified: datetime = head["LastModified"]
        if modified.tzinfo is None:
            modified = modified.replace(tzinfo=timezone.utc)
        return modified.astimezone(timezone.utc)

    async def upload(self, path: str, data: bytes, content_type: str = "image/png") -> None:
        key = self._full_key(path)
        self._s3.put_object(Bucket=self._bucket, Key=key, Body=data, ContentType=content_type)
        logger.debug("S3 upload: s3://%s/%s (%d bytes)", self._bucket, key, len(data))

    def get_url(self, path: str) -> str:
        key = self._full_key(path)
        if self._public_base_url:
            return f"{self._public_base_url}/{key}"
        if self._region:
            return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"
        return f"https://{self._bucket}.s3.amazonaws.com/{key}"
