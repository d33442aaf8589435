# app/services/storage.py
"""
Object storage behind the Replit sidecar.

The sidecar signs Google Cloud Storage URLs for us; uploads go straight from
the browser to the signed PUT URL, and downloads use a signed GET URL.
Uploaded objects live under PRIVATE_OBJECT_DIR and are referenced by the
rest of the app as `/objects/<entity id>`.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from urllib.parse import urlparse

import httpx

from app.core.config import Settings
from app.core.errors import ObjectNotFoundError, StorageError
from app.utils.ids import new_id

log = logging.getLogger(__name__)

GCS_HOST_PREFIX = "https://storage.googleapis.com/"
OBJECTS_PREFIX = "/objects/"


def parse_object_path(path: str) -> Tuple[str, str]:
    """'/bucket/dir/obj' -> ('bucket', 'dir/obj')"""
    if not path.startswith("/"):
        path = f"/{path}"
    parts = path.split("/")
    if len(parts) < 3 or not parts[1] or not parts[2]:
        raise ValueError("Invalid path: must contain at least a bucket name")
    return parts[1], "/".join(parts[2:])


class ObjectStorageService:
    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=30)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def get_private_object_dir(self) -> str:
        d = (self.settings.private_object_dir or "").strip()
        if not d:
            raise StorageError(
                "PRIVATE_OBJECT_DIR not set. Create a bucket and set PRIVATE_OBJECT_DIR env var."
            )
        return d

    # ====== URLs ======
    def normalize_path(self, raw_path: str) -> str:
        """Turns an uploaded GCS URL into the `/objects/<id>` reference we store."""
        if not raw_path.startswith(GCS_HOST_PREFIX):
            return raw_path

        object_path = urlparse(raw_path).path
        entity_dir = self.get_private_object_dir()
        if not entity_dir.endswith("/"):
            entity_dir = f"{entity_dir}/"

        if not object_path.startswith(entity_dir):
            return object_path

        entity_id = object_path[len(entity_dir):]
        return f"{OBJECTS_PREFIX}{entity_id}"

    def resolve_object_path(self, object_ref: str) -> str:
        """`/objects/<id>` -> full '/bucket/dir/<id>' path in the private dir."""
        if not object_ref.startswith(OBJECTS_PREFIX):
            raise ObjectNotFoundError(f"Object not found: {object_ref}")
        entity_id = object_ref[len(OBJECTS_PREFIX):]
        if not entity_id:
            raise ObjectNotFoundError(f"Object not found: {object_ref}")
        entity_dir = self.get_private_object_dir().rstrip("/")
        return f"{entity_dir}/{entity_id}"

    async def sign_object_url(self, *, bucket_name: str, object_name: str, method: str, ttl_sec: int) -> str:
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_sec)
        body = {
            "bucket_name": bucket_name,
            "object_name": object_name,
            "method": method,
            "expires_at": expires_at.isoformat(),
        }
        url = f"{self.settings.storage_sidecar_url.rstrip('/')}/object-storage/signed-object-url"
        r = await self.client.post(url, json=body)
        if r.status_code != 200:
            raise StorageError(
                f"Failed to sign object URL, errorcode: {r.status_code}, "
                "make sure you're running on Replit"
            )
        return r.json()["signed_url"]

    async def get_upload_url(self) -> str:
        full_path = f"{self.get_private_object_dir().rstrip('/')}/uploads/{new_id()}"
        bucket_name, object_name = parse_object_path(full_path)
        log.info(f"[STORAGE] upload URL para bucket={bucket_name}, object={object_name}")
        return await self.sign_object_url(
            bucket_name=bucket_name,
            object_name=object_name,
            method="PUT",
            ttl_sec=self.settings.upload_url_ttl_sec,
        )

    # ====== Descarga ======
    async def download_bytes(self, object_ref: str) -> bytes:
        full_path = self.resolve_object_path(object_ref)
        bucket_name, object_name = parse_object_path(full_path)
        log.info(f"[STORAGE] download: bucket={bucket_name}, object_name={object_name}")

        signed = await self.sign_object_url(
            bucket_name=bucket_name, object_name=object_name, method="GET", ttl_sec=300
        )
        r = await self.client.get(signed)
        if r.status_code == 404:
            raise ObjectNotFoundError(f"Object not found: {object_ref}")
        if r.status_code != 200:
            raise StorageError(f"HTTP GET failed {r.status_code} para {object_ref}")
        log.info(f"[STORAGE] OK ({len(r.content)} bytes)")
        return r.content
