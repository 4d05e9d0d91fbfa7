# src/storage/blob_factory.py — v1
"""Factory: instantiate blob store from configuration."""

from __future__ import annotations

from scripturai.config.settings import Settings, UnsupportedBackendError
from scripturai.storage.base_blob_store import BaseBlobStore
from scripturai.storage.local_blob_store import LocalBlobStore


def create_blob_store(settings: Settings) -> BaseBlobStore:
    """Create the blob store selected by BLOB_STORE_TYPE.

    Raises:
        UnsupportedBackendError: If the store type is not supported.
    """
    if settings.blob_store_type == "local":
        return LocalBlobStore(
            root=settings.blob_store_root,
            public_base_url=settings.blob_public_base_url,
        )

    if settings.blob_store_type == "s3":
        from scripturai.storage.s3_blob_store import S3BlobStore
        if not settings.blob_s3_bucket:
            raise ValueError(
                "BLOB_S3_BUCKET must be set when BLOB_STORE_TYPE=s3"
            )
        return S3BlobStore(
            bucket=settings.blob_s3_bucket,
            prefix=settings.blob_s3_prefix,
            region=settings.blob_s3_region or None,
            public_base_url=settings.blob_public_base_url,
        )

    raise UnsupportedBackendError(f"Unsupported blob store type: {settings.blob_store_type!r}")
