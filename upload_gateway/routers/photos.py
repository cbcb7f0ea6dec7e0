"""Photo upload and public listing."""

import asyncio

from fastapi import APIRouter, Depends, File, Form, UploadFile

from upload_gateway.config import Settings, get_settings
from upload_gateway.errors import MissingFileError
from upload_gateway.providers.storage import StorageProvider, get_storage_provider
from upload_gateway.schemas.responses import (
    ErrorResponse,
    ListPhotosResponse,
    PhotoItem,
    UploadResponse,
)
from upload_gateway.services.uploads import ingest_photo, list_public_photos

router = APIRouter(tags=["Photos"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing file or invalid field"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}


@router.post(
    "/upload",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
    summary="Upload photo",
    description="Upload one image as multipart field 'photo'. Optional 'name' becomes the object name base; "
    "optional 'visibility' (public | private, default private) is stored as object metadata.",
    operation_id="uploadPhoto",
)
async def upload_photo(
    photo: UploadFile | None = File(None, description="Image file"),
    name: str | None = Form(None, description="Base for the object name (default: photo)"),
    visibility: str | None = Form(None, description="public | private (default private)"),
    provider: StorageProvider = Depends(get_storage_provider),
    settings: Settings = Depends(get_settings),
) -> UploadResponse:
    if photo is None or not photo.filename:
        raise MissingFileError("No file uploaded")
    content = await photo.read()
    result = await asyncio.to_thread(
        ingest_photo,
        provider,
        content,
        photo.filename,
        photo.content_type,
        name=name,
        visibility=visibility,
        strict_visibility=settings.strict_visibility,
    )
    return UploadResponse(
        bucket=result.bucket,
        object_name=result.object_name,
        visibility=result.visibility,
        signed_url=result.signed_url,
    )


@router.get(
    "/photos",
    response_model=ListPhotosResponse,
    responses={500: _ERROR_RESPONSES[500]},
    summary="List public photos",
    description="Objects uploaded with visibility=public, newest first, each with a stable public URL.",
    operation_id="listPhotos",
)
async def list_photos(
    provider: StorageProvider = Depends(get_storage_provider),
    settings: Settings = Depends(get_settings),
) -> ListPhotosResponse:
    photos = await asyncio.to_thread(list_public_photos, provider, settings.public_base_url)
    return ListPhotosResponse(
        photos=[
            PhotoItem(
                name=p.name,
                url=p.url,
                updated=p.updated,
                size=p.size,
                content_type=p.content_type,
            )
            for p in photos
        ],
    )
