"""
Upload Gateway – FastAPI application entrypoint.

POST /upload stores one photo in the configured bucket under a generated name;
GET /photos lists photos uploaded with visibility=public, newest first.

Run locally:
  uvicorn main:app --host 0.0.0.0 --port 8080 --reload

Environment: see .env.example and upload_gateway.config.Settings.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the app root (directory containing main.py) so credentials are found
# regardless of current working directory when uvicorn is started.
_APP_DIR = Path(__file__).resolve().parent
load_dotenv(_APP_DIR / ".env")

# If GOOGLE_APPLICATION_CREDENTIALS is a relative path, resolve it relative to this app dir
# so the GCS client finds the key file no matter where the process was started.
_creds = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
if _creds:
    _creds_path = Path(_creds)
    if not _creds_path.is_absolute():
        os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = str((_APP_DIR / _creds_path).resolve())

import logging
import sys

from upload_gateway.config import get_settings

# Uvicorn can override root logging; configure the "upload_gateway" logger explicitly so it always outputs.
_LOG_LEVEL = (get_settings().log_level or "INFO").upper()
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
_app_logger = logging.getLogger("upload_gateway")
_app_logger.setLevel(_LOG_LEVEL)
_log_fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
if not _app_logger.handlers:
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(_log_fmt)
    _app_logger.addHandler(_handler)
# Do not propagate so each log is only handled once.
_app_logger.propagate = False
logger = _app_logger

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from upload_gateway import __version__
from upload_gateway.exception_handlers import register_exception_handlers
from upload_gateway.routers import health, photos


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    logger.info(
        "Upload Gateway %s: storage_provider=%s bucket=%s",
        __version__,
        settings.storage_provider,
        settings.bucket_name,
    )
    yield


OPENAPI_TAGS = [
    {"name": "Health", "description": "Liveness and configuration status."},
    {"name": "Photos", "description": "Upload photos and list public ones."},
]

app = FastAPI(
    title="Upload Gateway",
    description="Store uploaded photos in object storage under generated names; list public photos.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().get_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(photos.router)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
    )
