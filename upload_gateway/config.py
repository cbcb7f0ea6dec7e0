"""
Application configuration loaded from environment variables.
Use .env file or export variables; see .env.example for the available keys.
The storage backend is selectable; GCS is the default.
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_PROVIDERS = ("gcs", "local", "minio")


class Settings(BaseSettings):
    """Environment-based settings. Validates on load."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Storage backend ---
    storage_provider: str = "gcs"  # gcs | local | minio
    bucket_name: str = "brit-qr-uploads-482609"

    # Google Cloud (storage_provider=gcs); empty project lets the client infer it
    gcp_project_id: str = ""
    google_application_credentials: str = ""

    # Base for unsigned URLs of public objects: {public_base_url}/{bucket}/{object}
    public_base_url: str = "https://storage.googleapis.com"

    # Reject visibility values other than public/private instead of storing them verbatim
    strict_visibility: bool = False

    # Local storage (optional; used when storage_provider=local)
    local_storage_path: str = "data/storage"

    # MinIO (required when storage_provider=minio)
    minio_endpoint: str = ""  # e.g. localhost:9000
    minio_access_key: str = ""
    minio_secret_key: str = ""
    minio_secure: bool = False  # True for HTTPS

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # CORS: comma-separated origins, "*" for any
    cors_origins: str = "*"

    @field_validator("storage_provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        name = (v or "gcs").strip().lower()
        if name not in STORAGE_PROVIDERS:
            raise ValueError(f"STORAGE_PROVIDER must be one of {', '.join(STORAGE_PROVIDERS)} (got {v!r})")
        return name

    @field_validator("bucket_name", "gcp_project_id", "google_application_credentials", "minio_endpoint")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return (v or "").strip().rstrip("/")

    @model_validator(mode="after")
    def require_provider_specific_settings(self) -> "Settings":
        if not self.bucket_name:
            raise ValueError("BUCKET_NAME must be set and non-empty")

        if self.storage_provider == "minio":
            for name, val in [
                ("MINIO_ENDPOINT", self.minio_endpoint),
                ("MINIO_ACCESS_KEY", self.minio_access_key),
                ("MINIO_SECRET_KEY", self.minio_secret_key),
            ]:
                if not (val and str(val).strip()):
                    raise ValueError(f"{name} is required when STORAGE_PROVIDER=minio")

        return self

    def get_cors_origins(self) -> list[str]:
        """Return allowed CORS origins from CORS_ORIGINS (comma-separated)."""
        origins = [o.strip() for o in (self.cors_origins or "").split(",") if o.strip()]
        return origins or ["*"]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (env read once)."""
    return Settings()
