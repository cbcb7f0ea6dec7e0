"""Storage provider protocol: write objects, enumerate them, read per-object metadata, sign URLs."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class StoredObject:
    """Metadata of one object as reported by the store (content not included)."""

    name: str
    size: int | None = None
    content_type: str | None = None
    updated: datetime | None = None
    metadata: dict[str, str] = field(default_factory=dict)


class StorageProvider:
    """Abstract storage bound to a single bucket."""

    bucket_name: str

    def upload(
        self,
        object_name: str,
        content: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> None:
        """Store content under object_name with the given content type and custom metadata."""
        ...

    def list_object_names(self) -> list[str]:
        """Return the name of every object in the bucket."""
        ...

    def get_object(self, object_name: str) -> StoredObject:
        """Fetch metadata for one object. Raises PerObjectMetadataError if it cannot be read."""
        ...

    def generate_signed_url(self, object_name: str, expiration_seconds: int = 3600) -> str | None:
        """Return a time-limited read URL for the object, or None if not supported."""
        ...
