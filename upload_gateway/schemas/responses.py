"""Response schemas for API endpoints. JSON keys are camelCase for compatibility with existing clients."""

from datetime import datetime

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Response for POST /upload."""

    ok: bool = Field(True, description="Always true on success")
    bucket: str = Field(..., description="Bucket the object was written to")
    object_name: str = Field(..., serialization_alias="objectName", description="Generated object name")
    visibility: str = Field(..., description="Visibility as stored (public | private | value sent by caller)")
    signed_url: str | None = Field(
        None,
        serialization_alias="signedUrl",
        description="7-day signed read URL for the new object (omitted when the backend cannot sign)",
    )


class PhotoItem(BaseModel):
    """Single public photo in GET /photos."""

    name: str = Field(..., description="Object name")
    url: str = Field(..., description="Stable unsigned public URL")
    updated: datetime | None = Field(None, description="Last update time assigned by the store")
    size: int | None = Field(None, description="Size in bytes")
    content_type: str | None = Field(None, serialization_alias="contentType", description="MIME type")


class ListPhotosResponse(BaseModel):
    """Response for GET /photos: public photos, newest first."""

    ok: bool = Field(True, description="Always true on success")
    photos: list[PhotoItem] = Field(..., description="Public photos sorted by updated, newest first")


class ErrorResponse(BaseModel):
    """Body returned with every 4xx/5xx."""

    error: str = Field(..., description="Human-readable error message")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Always 'healthy' when endpoint succeeds")
    storage_provider: str = Field(..., description="Configured storage backend (gcs, local, minio)")
    bucket: str = Field(..., description="Configured bucket name")
