"""Photo uploads: store one file under a generated name, list public photos newest first."""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import quote

from upload_gateway.errors import (
    PerObjectMetadataError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)
from upload_gateway.naming import PRIVATE, PUBLIC, build_object_name, effective_visibility, is_public
from upload_gateway.providers.storage.base import StorageProvider
from upload_gateway.upload_logging import log_upload_event

logger = logging.getLogger("upload_gateway.services.uploads")

SIGNED_URL_EXPIRY_SECONDS = 7 * 24 * 60 * 60  # 7 days
DEFAULT_CONTENT_TYPE = "application/octet-stream"
_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


@dataclass
class UploadResult:
    bucket: str
    object_name: str
    visibility: str
    signed_url: str | None = None


@dataclass
class PhotoInfo:
    name: str
    url: str
    updated: datetime | None
    size: int | None
    content_type: str | None


def ingest_photo(
    provider: StorageProvider,
    content: bytes,
    filename: str | None,
    content_type: str | None,
    *,
    name: str | None = None,
    visibility: str | None = None,
    strict_visibility: bool = False,
    now: datetime | None = None,
) -> UploadResult:
    """
    Write one uploaded file to the bucket.
    Object name: {sanitized name}_{timestamp}.{extension}; visibility is stored as custom metadata.
    Raises ValidationError (strict mode only) or StorageWriteError.
    """
    visibility = effective_visibility(visibility)
    if strict_visibility and visibility not in (PUBLIC, PRIVATE):
        raise ValidationError(f"visibility must be '{PUBLIC}' or '{PRIVATE}' (got {visibility!r})")

    object_name = build_object_name(name, filename, now)
    started = time.monotonic()
    try:
        provider.upload(
            object_name,
            content,
            content_type or DEFAULT_CONTENT_TYPE,
            metadata={"visibility": visibility},
        )
    except Exception as e:
        log_upload_event(
            provider.bucket_name,
            "failed",
            object_name=object_name,
            visibility=visibility,
            error=str(e),
        )
        raise StorageWriteError(str(e)) from e

    log_upload_event(
        provider.bucket_name,
        "stored",
        object_name=object_name,
        visibility=visibility,
        size=len(content),
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    # the object is already written: a signing failure must not turn into a failed upload
    try:
        signed_url = provider.generate_signed_url(object_name, expiration_seconds=SIGNED_URL_EXPIRY_SECONDS)
    except Exception as e:
        logger.warning("Signed URL for %s unavailable: %s", object_name, e)
        signed_url = None
    return UploadResult(
        bucket=provider.bucket_name,
        object_name=object_name,
        visibility=visibility,
        signed_url=signed_url,
    )


def public_url(public_base_url: str, bucket: str, object_name: str) -> str:
    """Stable unsigned URL: {base}/{bucket}/{object name, fully percent-encoded}."""
    encoded = quote(object_name, safe="!*'()")
    return f"{public_base_url.rstrip('/')}/{bucket}/{encoded}"


def _sort_key(photo: PhotoInfo) -> datetime:
    updated = photo.updated or _EPOCH
    if updated.tzinfo is None:
        updated = updated.replace(tzinfo=timezone.utc)
    return updated


def list_public_photos(provider: StorageProvider, public_base_url: str) -> list[PhotoInfo]:
    """
    Return objects whose custom metadata marks them public, newest first.
    Objects whose metadata cannot be read are skipped. Raises StorageReadError if listing fails.
    """
    started = time.monotonic()
    try:
        names = provider.list_object_names()
    except Exception as e:
        log_upload_event(provider.bucket_name, "failed", error=str(e))
        raise StorageReadError(str(e)) from e

    photos: list[PhotoInfo] = []
    for object_name in names:
        try:
            obj = provider.get_object(object_name)
        except PerObjectMetadataError as e:
            log_upload_event(provider.bucket_name, "skipped", object_name=object_name, error=e.message)
            continue
        if not is_public(obj.metadata.get("visibility")):
            continue
        photos.append(
            PhotoInfo(
                name=obj.name,
                url=public_url(public_base_url, provider.bucket_name, obj.name),
                updated=obj.updated,
                size=obj.size,
                content_type=obj.content_type,
            )
        )

    photos.sort(key=_sort_key, reverse=True)
    log_upload_event(
        provider.bucket_name,
        "listed",
        count=len(photos),
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    return photos
