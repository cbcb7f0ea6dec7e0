"""Object naming and visibility rules for uploaded photos."""

import re
from datetime import datetime, timezone
from pathlib import PurePath

FALLBACK_BASE = "photo"
DEFAULT_EXTENSION = "jpg"
PUBLIC = "public"
PRIVATE = "private"

_UNSAFE_RUN = re.compile(r"[^\w-]+", re.ASCII)


def sanitize_base(name: str | None) -> str:
    """Trim `name`, fall back to "photo" when empty, and collapse every run of
    characters other than word characters and hyphens into a single underscore."""
    base = (name or "").strip()
    if not base:
        return FALLBACK_BASE
    return _UNSAFE_RUN.sub("_", base)


def upload_timestamp(now: datetime | None = None) -> str:
    """UTC ISO timestamp with millisecond precision, ':' and '.' replaced by '-'.

    2024-05-01T12:30:45.123Z -> 2024-05-01T12-30-45-123Z
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    iso = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


def file_extension(filename: str | None) -> str:
    """Extension of the original filename without the dot; "jpg" when there is none."""
    if not filename:
        return DEFAULT_EXTENSION
    return PurePath(filename).suffix.lstrip(".") or DEFAULT_EXTENSION


def build_object_name(name: str | None, filename: str | None, now: datetime | None = None) -> str:
    return f"{sanitize_base(name)}_{upload_timestamp(now)}.{file_extension(filename)}"


def effective_visibility(visibility: str | None) -> str:
    """Missing or empty visibility means private; anything else is kept verbatim."""
    return visibility or PRIVATE


def is_public(visibility: str | None) -> bool:
    # exact match only: "PUBLIC" and " public" are private
    return visibility == PUBLIC
