"""
Pytest configuration for the upload gateway.

The app is exercised through FastAPI's TestClient with an in-memory storage
provider injected via dependency_overrides, so no cloud credentials are needed.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from upload_gateway.config import Settings, get_settings
from upload_gateway.errors import PerObjectMetadataError
from upload_gateway.providers.storage import StorageProvider, StoredObject, get_storage_provider

TEST_BUCKET = "test-bucket"


class FakeStorageProvider(StorageProvider):
    """In-memory bucket. Records every write; failures can be injected per operation."""

    def __init__(self, bucket_name: str = TEST_BUCKET) -> None:
        self.bucket_name = bucket_name
        self.objects: dict[str, StoredObject] = {}
        self.contents: dict[str, bytes] = {}
        self.fail_upload: Exception | None = None
        self.fail_list: Exception | None = None
        self.broken: set[str] = set()
        self.sign = True
        self.fail_sign: Exception | None = None

    def upload(self, object_name, content, content_type, metadata=None) -> None:
        if self.fail_upload is not None:
            raise self.fail_upload
        self.contents[object_name] = content
        self.objects[object_name] = StoredObject(
            name=object_name,
            size=len(content),
            content_type=content_type,
            updated=datetime.now(timezone.utc),
            metadata=dict(metadata or {}),
        )

    def add(
        self,
        object_name: str,
        *,
        visibility: str | None = "public",
        updated: datetime | None = None,
        size: int = 3,
        content_type: str = "image/jpeg",
    ) -> None:
        """Seed an object directly, bypassing upload."""
        self.objects[object_name] = StoredObject(
            name=object_name,
            size=size,
            content_type=content_type,
            updated=updated,
            metadata={"visibility": visibility} if visibility is not None else {},
        )

    def list_object_names(self) -> list[str]:
        if self.fail_list is not None:
            raise self.fail_list
        return list(self.objects)

    def get_object(self, object_name: str) -> StoredObject:
        if object_name in self.broken:
            raise PerObjectMetadataError(object_name, f"metadata unavailable for {object_name}")
        return self.objects[object_name]

    def generate_signed_url(self, object_name: str, expiration_seconds: int = 3600) -> str | None:
        if self.fail_sign is not None:
            raise self.fail_sign
        if not self.sign:
            return None
        return f"https://signed.example/{self.bucket_name}/{object_name}?expires={expiration_seconds}"


@pytest.fixture
def fake_storage() -> FakeStorageProvider:
    return FakeStorageProvider()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, bucket_name=TEST_BUCKET)


@pytest.fixture
def app(fake_storage: FakeStorageProvider, settings: Settings):
    from main import app

    app.dependency_overrides[get_storage_provider] = lambda: fake_storage
    app.dependency_overrides[get_settings] = lambda: settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def server_error_client(app):
    """Client that returns 500 responses instead of re-raising unhandled exceptions."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
