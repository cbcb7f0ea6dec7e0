"""FastAPI exception handlers: every failure leaves the API as {"error": message}."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from upload_gateway.errors import MissingFileError, UploadGatewayError

logger = logging.getLogger("upload_gateway.errors")

# Multipart field that must carry the uploaded file
_FILE_FIELD = "photo"


async def upload_gateway_error_handler(request: Request, exc: UploadGatewayError) -> JSONResponse:
    """Map gateway errors to their status code. Client errors log at warning, the rest at error."""
    if exc.status_code < 500:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    else:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _describe(error: dict) -> str:
    field = ".".join(str(part) for part in error.get("loc", ())[1:]) or "request"
    return f"{field}: {error.get('msg', 'invalid value')}"


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Rejected request bodies are client errors: 400 {"error": ...}, never FastAPI's 422 detail list.
    A `photo` part that is not a file counts as no file at all."""
    errors = exc.errors()
    if any(_FILE_FIELD in error.get("loc", ()) for error in errors):
        return await upload_gateway_error_handler(request, MissingFileError("No file uploaded"))
    message = "; ".join(_describe(error) for error in errors) or "Invalid request"
    logger.warning("%s %s -> RequestValidationError: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s failed", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UploadGatewayError, upload_gateway_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
