"""Local filesystem storage provider: no GCP. Objects live under {base}/{bucket}/ with a JSON sidecar."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from upload_gateway.config import get_settings
from upload_gateway.errors import PerObjectMetadataError
from upload_gateway.providers.storage.base import StorageProvider, StoredObject

# Sidecars hold content type and custom metadata: {bucket}/.meta/{object_name}.json
_META_DIR = ".meta"


def _base_dir() -> Path:
    settings = get_settings()
    raw = settings.local_storage_path.strip() or "data/storage"
    p = Path(raw)
    if not p.is_absolute():
        p = Path.cwd() / p
    return p


class LocalStorageProvider(StorageProvider):
    """Storage using local filesystem. Object names are relative paths under the bucket directory."""

    def __init__(self, bucket_name: str, base_dir: Path | None = None) -> None:
        self.bucket_name = bucket_name
        self._base_dir = base_dir

    @property
    def root(self) -> Path:
        return (self._base_dir or _base_dir()) / self.bucket_name

    def _object_path(self, object_name: str) -> Path:
        root = self.root.resolve()
        full = (root / object_name).resolve()
        if root not in full.parents or full.relative_to(root).parts[0] == _META_DIR:
            raise ValueError(f"Invalid object name: {object_name}")
        return full

    def _meta_path(self, object_name: str) -> Path:
        return self.root / _META_DIR / f"{object_name}.json"

    def upload(
        self,
        object_name: str,
        content: bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> None:
        full = self._object_path(object_name)
        full.parent.mkdir(parents=True, exist_ok=True)
        full.write_bytes(content)
        meta = self._meta_path(object_name)
        meta.parent.mkdir(parents=True, exist_ok=True)
        meta.write_text(
            json.dumps({"contentType": content_type, "metadata": metadata or {}}),
            encoding="utf-8",
        )

    def list_object_names(self) -> list[str]:
        root = self.root
        if not root.is_dir():
            return []
        names = []
        for path in root.rglob("*"):
            rel = path.relative_to(root)
            if rel.parts[0] == _META_DIR or not path.is_file():
                continue
            names.append(rel.as_posix())
        return sorted(names)

    def get_object(self, object_name: str) -> StoredObject:
        try:
            full = self._object_path(object_name)
            stat = full.stat()
            sidecar = json.loads(self._meta_path(object_name).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PerObjectMetadataError(object_name, str(e)) from e
        return StoredObject(
            name=object_name,
            size=stat.st_size,
            content_type=sidecar.get("contentType"),
            updated=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            metadata=dict(sidecar.get("metadata") or {}),
        )

    def generate_signed_url(self, object_name: str, expiration_seconds: int = 3600) -> str | None:
        """Local: no real signing."""
        return None
