from datetime import datetime, timedelta, timezone

import pytest

from tests.conftest import TEST_BUCKET
from upload_gateway.errors import StorageReadError, StorageWriteError, ValidationError
from upload_gateway.services.uploads import (
    SIGNED_URL_EXPIRY_SECONDS,
    ingest_photo,
    list_public_photos,
    public_url,
)

NOW = datetime(2024, 5, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)
BASE_URL = "https://storage.googleapis.com"


def test_ingest_writes_one_object_with_metadata(fake_storage):
    result = ingest_photo(fake_storage, b"abc", "cat.png", "image/png", name="a b!c", visibility="public", now=NOW)

    assert result.bucket == TEST_BUCKET
    assert result.object_name == "a_b_c_2024-05-01T12-30-45-123Z.png"
    assert result.visibility == "public"
    assert list(fake_storage.objects) == [result.object_name]
    stored = fake_storage.objects[result.object_name]
    assert stored.content_type == "image/png"
    assert stored.metadata == {"visibility": "public"}
    assert fake_storage.contents[result.object_name] == b"abc"


def test_ingest_defaults(fake_storage):
    result = ingest_photo(fake_storage, b"abc", "blob", None, now=NOW)

    assert result.object_name == "photo_2024-05-01T12-30-45-123Z.jpg"
    assert result.visibility == "private"
    stored = fake_storage.objects[result.object_name]
    assert stored.metadata == {"visibility": "private"}
    assert stored.content_type == "application/octet-stream"


def test_ingest_returns_seven_day_signed_url(fake_storage):
    result = ingest_photo(fake_storage, b"abc", "cat.png", "image/png", now=NOW)

    assert SIGNED_URL_EXPIRY_SECONDS == 604800
    assert result.signed_url.endswith(f"?expires={SIGNED_URL_EXPIRY_SECONDS}")


def test_ingest_without_signing(fake_storage):
    fake_storage.sign = False
    result = ingest_photo(fake_storage, b"abc", "cat.png", "image/png", now=NOW)
    assert result.signed_url is None


def test_ingest_survives_signing_failure(fake_storage):
    fake_storage.fail_sign = KeyError("sig")

    result = ingest_photo(fake_storage, b"abc", "cat.png", "image/png", now=NOW)

    assert result.signed_url is None
    assert list(fake_storage.objects) == [result.object_name]


def test_ingest_keeps_unknown_visibility_verbatim(fake_storage):
    result = ingest_photo(fake_storage, b"abc", "cat.png", "image/png", visibility="PUBLIC", now=NOW)

    assert result.visibility == "PUBLIC"
    assert fake_storage.objects[result.object_name].metadata == {"visibility": "PUBLIC"}
    assert list_public_photos(fake_storage, BASE_URL) == []


def test_ingest_strict_visibility_rejects_unknown_value(fake_storage):
    with pytest.raises(ValidationError):
        ingest_photo(fake_storage, b"abc", "cat.png", "image/png", visibility="PUBLIC", strict_visibility=True)
    assert fake_storage.objects == {}


def test_ingest_strict_visibility_accepts_known_values(fake_storage):
    for visibility in ("public", "private", None):
        ingest_photo(fake_storage, b"abc", "cat.png", "image/png", visibility=visibility, strict_visibility=True)


def test_ingest_wraps_storage_failure(fake_storage):
    fake_storage.fail_upload = RuntimeError("bucket is on fire")

    with pytest.raises(StorageWriteError) as exc_info:
        ingest_photo(fake_storage, b"abc", "cat.png", "image/png")

    assert exc_info.value.message == "bucket is on fire"
    assert exc_info.value.status_code == 500


def test_list_orders_newest_first(fake_storage):
    t1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    fake_storage.add("middle.jpg", updated=t1 + timedelta(hours=1))
    fake_storage.add("oldest.jpg", updated=t1)
    fake_storage.add("newest.jpg", updated=t1 + timedelta(hours=2))

    photos = list_public_photos(fake_storage, BASE_URL)

    assert [p.name for p in photos] == ["newest.jpg", "middle.jpg", "oldest.jpg"]


def test_list_missing_updated_sorts_as_oldest(fake_storage):
    fake_storage.add("unknown.jpg", updated=None)
    fake_storage.add("dated.jpg", updated=datetime(1990, 1, 1, tzinfo=timezone.utc))

    photos = list_public_photos(fake_storage, BASE_URL)

    assert [p.name for p in photos] == ["dated.jpg", "unknown.jpg"]


def test_list_only_public(fake_storage):
    fake_storage.add("pub.jpg", visibility="public")
    fake_storage.add("priv.jpg", visibility="private")
    fake_storage.add("untagged.jpg", visibility=None)
    fake_storage.add("shouting.jpg", visibility="PUBLIC")

    assert [p.name for p in list_public_photos(fake_storage, BASE_URL)] == ["pub.jpg"]


def test_list_skips_objects_with_unreadable_metadata(fake_storage):
    fake_storage.add("good.jpg")
    fake_storage.add("bad.jpg")
    fake_storage.broken.add("bad.jpg")

    assert [p.name for p in list_public_photos(fake_storage, BASE_URL)] == ["good.jpg"]


def test_list_is_repeatable(fake_storage):
    fake_storage.add("a.jpg", updated=datetime(2024, 1, 1, tzinfo=timezone.utc))
    fake_storage.add("b.jpg", updated=datetime(2024, 1, 2, tzinfo=timezone.utc))

    first = list_public_photos(fake_storage, BASE_URL)
    second = list_public_photos(fake_storage, BASE_URL)

    assert {p.name for p in first} == {p.name for p in second}


def test_list_wraps_storage_failure(fake_storage):
    fake_storage.fail_list = RuntimeError("permission denied")

    with pytest.raises(StorageReadError, match="permission denied"):
        list_public_photos(fake_storage, BASE_URL)


def test_list_photo_fields(fake_storage):
    updated = datetime(2024, 1, 1, tzinfo=timezone.utc)
    fake_storage.add("my photo.png", updated=updated, size=42, content_type="image/png")

    (photo,) = list_public_photos(fake_storage, BASE_URL)

    assert photo.name == "my photo.png"
    assert photo.url == f"{BASE_URL}/{TEST_BUCKET}/my%20photo.png"
    assert photo.updated == updated
    assert photo.size == 42
    assert photo.content_type == "image/png"


def test_public_url_encodes_like_encode_uri_component():
    assert public_url(BASE_URL + "/", "b", "dir/a b&c(1)!.jpg") == f"{BASE_URL}/b/dir%2Fa%20b%26c(1)!.jpg"
