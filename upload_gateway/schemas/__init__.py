"""Response schemas for API endpoints."""

from upload_gateway.schemas.responses import (
    ErrorResponse,
    HealthResponse,
    ListPhotosResponse,
    PhotoItem,
    UploadResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "ListPhotosResponse",
    "PhotoItem",
    "UploadResponse",
]
