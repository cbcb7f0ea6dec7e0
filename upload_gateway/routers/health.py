"""Liveness and health check."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from upload_gateway.config import Settings, get_settings
from upload_gateway.schemas.responses import HealthResponse

router = APIRouter(tags=["Health"])

LIVENESS_MESSAGE = "✅ Backend is running. Use POST /upload to upload photos."


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness",
    description="Plain-text liveness string.",
    operation_id="getLiveness",
)
def liveness() -> str:
    return LIVENESS_MESSAGE


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns status, configured storage provider and bucket.",
    operation_id="getHealth",
)
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        storage_provider=settings.storage_provider,
        bucket=settings.bucket_name,
    )
