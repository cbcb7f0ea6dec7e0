"""Structured logging for uploads and listings (stored/failed/listed/skipped)."""

import json
import logging
from typing import Any

logger = logging.getLogger("upload_gateway.uploads")


def _extra(
    bucket: str,
    event: str,
    *,
    object_name: str | None = None,
    visibility: str | None = None,
    size: int | None = None,
    count: int | None = None,
    duration_ms: int | None = None,
    error: str | None = None,
) -> dict[str, Any]:
    out: dict[str, Any] = {
        "event": event,
        "bucket": bucket,
    }
    if object_name is not None:
        out["object_name"] = object_name
    if visibility is not None:
        out["visibility"] = visibility
    if size is not None:
        out["size"] = size
    if count is not None:
        out["count"] = count
    if duration_ms is not None:
        out["duration_ms"] = duration_ms
    if error is not None:
        out["error"] = error
    return out


def log_upload_event(
    bucket: str,
    event: str,
    *,
    object_name: str | None = None,
    visibility: str | None = None,
    size: int | None = None,
    count: int | None = None,
    duration_ms: int | None = None,
    error: str | None = None,
) -> None:
    """Emit one structured log line for an upload or listing.
    event: stored | failed | listed | skipped.
    """
    extra_dict = _extra(
        bucket,
        event,
        object_name=object_name,
        visibility=visibility,
        size=size,
        count=count,
        duration_ms=duration_ms,
        error=error,
    )
    msg = json.dumps(extra_dict)
    if event == "failed":
        logger.error(msg, extra=extra_dict)
    elif event == "skipped":
        logger.debug(msg, extra=extra_dict)
    else:
        logger.info(msg, extra=extra_dict)
