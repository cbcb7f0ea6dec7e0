"""GCS storage provider: Google Cloud Storage via google-cloud-storage."""

import logging
from datetime import timedelta

from upload_gateway.config import get_settings
from upload_gateway.errors import PerObjectMetadataError
from upload_gateway.providers.storage.base import StorageProvider, StoredObject

logger = logging.getLogger("upload_gateway.storage.gcs")


def _client():
    from google.cloud import storage

    settings = get_settings()
    project = settings.gcp_project_id or None
    if settings.google_application_credentials:
        return storage.Client.from_service_account_json(settings.google_application_credentials, project=project)
    return storage.Client(project=project)


class GCSStorageProvider(StorageProvider):
    """Storage using Google Cloud Storage. Client is created lazily on first use."""

    def __init__(self, bucket_name: str, client=None) -> None:
        self.bucket_name = bucket_name
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = _client()
        return self._client

    def _bucket(self):
        return self.client.bucket(self.bucket_name)

    def upload(
        self,
        object_name: str,
        content: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> None:
        blob = self._bucket().blob(object_name)
        if metadata:
            blob.metadata = dict(metadata)
        blob.upload_from_string(content, content_type=content_type)

    def list_object_names(self) -> list[str]:
        return [blob.name for blob in self.client.list_blobs(self.bucket_name)]

    def get_object(self, object_name: str) -> StoredObject:
        try:
            blob = self._bucket().get_blob(object_name)
        except Exception as e:
            raise PerObjectMetadataError(object_name, str(e)) from e
        if blob is None:
            raise PerObjectMetadataError(object_name, f"Object {object_name} no longer exists")
        return StoredObject(
            name=blob.name,
            size=blob.size,
            content_type=blob.content_type,
            updated=blob.updated,
            metadata=dict(blob.metadata or {}),
        )

    def generate_signed_url(self, object_name: str, expiration_seconds: int = 3600) -> str | None:
        # Signing needs a private key (service account file or IAM signBlob); user credentials cannot sign.
        try:
            blob = self._bucket().blob(object_name)
            return blob.generate_signed_url(
                version="v4",
                expiration=timedelta(seconds=expiration_seconds),
                method="GET",
            )
        except Exception as e:
            logger.warning("Signed URL for %s unavailable: %s", object_name, e)
            return None
