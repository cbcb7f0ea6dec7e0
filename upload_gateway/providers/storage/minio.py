"""MinIO (S3-compatible) storage provider: self-hosted object storage."""

from __future__ import annotations

import logging
from datetime import timedelta
from io import BytesIO

from upload_gateway.config import get_settings
from upload_gateway.errors import PerObjectMetadataError
from upload_gateway.providers.storage.base import StorageProvider, StoredObject

logger = logging.getLogger("upload_gateway.storage.minio")

# Custom metadata travels as x-amz-meta-* headers
_META_PREFIX = "x-amz-meta-"


def _get_client():
    from minio import Minio

    settings = get_settings()
    return Minio(
        settings.minio_endpoint,
        access_key=settings.minio_access_key,
        secret_key=settings.minio_secret_key,
        secure=settings.minio_secure,
    )


def _user_metadata(headers) -> dict[str, str]:
    out: dict[str, str] = {}
    for key, value in (headers or {}).items():
        lowered = key.lower()
        if lowered.startswith(_META_PREFIX):
            out[lowered[len(_META_PREFIX) :]] = value
    return out


class MinIOStorageProvider(StorageProvider):
    """Storage using MinIO (S3-compatible)."""

    def __init__(self, bucket_name: str, client=None) -> None:
        self.bucket_name = bucket_name
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = _get_client()
        return self._client

    def _ensure_bucket(self) -> None:
        """Create the bucket if it does not exist (idempotent)."""
        if not self.client.bucket_exists(self.bucket_name):
            self.client.make_bucket(self.bucket_name)

    def upload(
        self,
        object_name: str,
        content: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> None:
        self._ensure_bucket()
        self.client.put_object(
            self.bucket_name,
            object_name,
            BytesIO(content),
            len(content),
            content_type=content_type,
            metadata=dict(metadata or {}),
        )

    def list_object_names(self) -> list[str]:
        if not self.client.bucket_exists(self.bucket_name):
            return []
        return [obj.object_name for obj in self.client.list_objects(self.bucket_name, recursive=True)]

    def get_object(self, object_name: str) -> StoredObject:
        try:
            stat = self.client.stat_object(self.bucket_name, object_name)
        except Exception as e:
            raise PerObjectMetadataError(object_name, str(e)) from e
        return StoredObject(
            name=stat.object_name,
            size=stat.size,
            content_type=stat.content_type,
            updated=stat.last_modified,
            metadata=_user_metadata(stat.metadata),
        )

    def generate_signed_url(self, object_name: str, expiration_seconds: int = 3600) -> str | None:
        try:
            return self.client.presigned_get_object(
                self.bucket_name,
                object_name,
                expires=timedelta(seconds=expiration_seconds),
            )
        except Exception as e:
            logger.warning("Signed URL for %s unavailable: %s", object_name, e)
            return None
