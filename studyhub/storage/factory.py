from __future__ import annotations

import logging
import threading

from studyhub.settings import STORAGE_MODES, Settings, settings
from studyhub.storage.base import StorageBackend
from studyhub.storage.errors import StorageConfigError
from studyhub.storage.local import LocalStorage
from studyhub.storage.router import StorageRouter

logger = logging.getLogger(__name__)

# Auto-mode selection order; disk is appended last unconditionally.
REMOTE_PRIORITY = ("remote-bucket", "remote-signed")


def _build_disk(cfg: Settings) -> LocalStorage:
    return LocalStorage(cfg.storage_local_path, cfg.disk_base_url)


def _build_supabase(cfg: Settings) -> StorageBackend:
    from studyhub.storage.supabase import SupabaseStorage

    return SupabaseStorage(url=cfg.supabase_url, key=cfg.supabase_key, bucket=cfg.supabase_bucket)


def _build_s3(cfg: Settings) -> StorageBackend:
    from studyhub.storage.s3 import S3Storage

    return S3Storage(
        bucket=cfg.s3_bucket,
        region=cfg.s3_region,
        access_key_id=cfg.s3_access_key_id,
        secret_access_key=cfg.s3_secret_access_key,
        endpoint_url=cfg.s3_endpoint_url,
        public_base_url=cfg.s3_public_base_url,
        presigned_expiry=cfg.s3_presigned_expiry,
    )


def is_configured(mode: str, cfg: Settings) -> bool:
    """Presence check only; no network calls."""
    if mode == "remote-bucket":
        return cfg.has_supabase_credentials()
    if mode == "remote-signed":
        return cfg.has_s3_credentials()
    return mode == "disk"


def select_backend(cfg: Settings | None = None) -> str:
    cfg = cfg or settings
    mode = cfg.storage_mode.strip().lower()
    if mode not in STORAGE_MODES:
        raise StorageConfigError(f"Unsupported STORAGE_MODE: {cfg.storage_mode}")
    if mode != "auto":
        return mode
    for candidate in REMOTE_PRIORITY:
        if is_configured(candidate, cfg):
            return candidate
    return "disk"


def build_storage(cfg: Settings | None = None) -> StorageRouter:
    cfg = cfg or settings
    mode = cfg.storage_mode.strip().lower()
    selected = select_backend(cfg)
    disk = _build_disk(cfg)
    builders = {"remote-bucket": _build_supabase, "remote-signed": _build_s3}

    if mode != "auto":
        backend = disk if selected == "disk" else builders[selected](cfg)
        logger.info("Using storage backend: %s (pinned)", selected)
        return StorageRouter([backend], disk=disk, pinned=True)

    chain: list[StorageBackend] = [
        builders[candidate](cfg) for candidate in REMOTE_PRIORITY if is_configured(candidate, cfg)
    ]
    chain.append(disk)
    logger.info("Using storage backend: %s (auto, chain=%s)", selected, ",".join(b.name for b in chain))
    return StorageRouter(chain, disk=disk)


class StorageHolder:
    """Owns one lazily built router so every request shares the same backend handles."""

    def __init__(self, cfg: Settings | None = None) -> None:
        self._cfg = cfg
        self._router: StorageRouter | None = None
        self._lock = threading.Lock()

    def get(self) -> StorageRouter:
        if self._router is not None:
            return self._router
        with self._lock:
            if self._router is None:
                self._router = build_storage(self._cfg)
        return self._router

    def set(self, router: StorageRouter | None) -> None:
        self._router = router
