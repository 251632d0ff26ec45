"""Bucket-API backend backed by Supabase Storage."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

import httpx
from storage3.exceptions import StorageApiError

from studyhub.storage.base import StorageBackend
from studyhub.storage.errors import (
    NotFoundOnDelete,
    ObjectExistsError,
    StorageConfigError,
    StorageError,
    TransientBackendError,
)

if TYPE_CHECKING:
    from supabase import Client

logger = logging.getLogger(__name__)

_AUTH_STATUSES = {401, 403}


def _status_of(exc: StorageApiError) -> int:
    status = getattr(exc, "status", None)
    try:
        return int(status or 0)
    except (TypeError, ValueError):
        return 0


def _classify(exc: Exception, action: str, key: str) -> StorageError:
    if isinstance(exc, StorageApiError):
        status = _status_of(exc)
        if status in _AUTH_STATUSES:
            return StorageConfigError(f"Supabase rejected credentials while trying to {action} {key}: {exc}")
        if status == 404:
            return NotFoundOnDelete(f"Supabase object not found: {key}")
        if status == 409:
            return ObjectExistsError(f"Supabase object already exists: {key}")
    return TransientBackendError(f"Supabase {action} failed for {key}: {exc}")


class SupabaseStorage(StorageBackend):
    name = "remote-bucket"

    def __init__(self, url: str, key: str, bucket: str = "pdfs") -> None:
        self.url = url.rstrip("/")
        self._key = key
        self.bucket = bucket
        self._client: Client | None = None
        self._lock = threading.Lock()

    def connect(self) -> Client:
        """Bind credentials to the bucket once; later calls return the same client."""
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                if not self.url or not self._key:
                    raise StorageConfigError(
                        "Supabase credentials not found. Set SUPABASE_URL and "
                        "SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_ANON_KEY)"
                    )
                from supabase import create_client

                try:
                    self._client = create_client(self.url, self._key)
                except Exception as exc:
                    raise StorageConfigError(f"Supabase client initialization failed: {exc}") from exc
                logger.info("Supabase storage initialized for bucket=%s", self.bucket)
        return self._client

    @property
    def public_prefix(self) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/"

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        bucket = self.connect().storage.from_(self.bucket)
        try:
            bucket.upload(
                path=key,
                file=data,
                file_options={"content-type": content_type, "upsert": "false"},
            )
        except (StorageApiError, httpx.HTTPError) as exc:
            raise _classify(exc, "upload", key) from exc
        logger.info("Uploaded %s to supabase bucket=%s (%d bytes)", key, self.bucket, len(data))
        return self.get_url(key)

    def delete(self, key: str) -> None:
        bucket = self.connect().storage.from_(self.bucket)
        try:
            bucket.remove([key])
        except (StorageApiError, httpx.HTTPError) as exc:
            error = _classify(exc, "delete", key)
            if isinstance(error, NotFoundOnDelete):
                logger.debug("Supabase object %s already gone", key)
                return
            raise error from exc
        logger.info("Deleted %s from supabase bucket=%s", key, self.bucket)

    def get_url(self, key: str) -> str:
        return f"{self.public_prefix}{key}"

    def owns_url(self, url: str) -> bool:
        return url.startswith(self.public_prefix)
