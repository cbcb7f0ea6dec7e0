"""Storage providers: gcs (Google Cloud Storage), local (filesystem), minio (S3-compatible)."""

from upload_gateway.config import get_settings
from upload_gateway.providers.storage.base import StorageProvider, StoredObject
from upload_gateway.providers.storage.gcs import GCSStorageProvider
from upload_gateway.providers.storage.local import LocalStorageProvider
from upload_gateway.providers.storage.minio import MinIOStorageProvider

_PROVIDER: StorageProvider | None = None


def get_storage_provider() -> StorageProvider:
    """Return the configured storage provider (gcs | local | minio). Cached per process."""
    global _PROVIDER
    if _PROVIDER is not None:
        return _PROVIDER
    settings = get_settings()
    name = settings.storage_provider
    if name == "local":
        _PROVIDER = LocalStorageProvider(settings.bucket_name)
    elif name == "minio":
        _PROVIDER = MinIOStorageProvider(settings.bucket_name)
    else:
        _PROVIDER = GCSStorageProvider(settings.bucket_name)
    return _PROVIDER


__all__ = [
    "StorageProvider",
    "StoredObject",
    "get_storage_provider",
    "GCSStorageProvider",
    "LocalStorageProvider",
    "MinIOStorageProvider",
]
