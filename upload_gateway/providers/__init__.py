"""
Provider abstractions for object storage.
Allows multiple backends (GCS, MinIO, local filesystem) behind one interface.
"""

from upload_gateway.providers.storage import get_storage_provider

__all__ = [
    "get_storage_provider",
]
