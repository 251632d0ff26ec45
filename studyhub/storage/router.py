from __future__ import annotations

import logging

from studyhub.models.media import StorageReference
from studyhub.storage.base import StorageBackend, StoredFile
from studyhub.storage.errors import IOFatalError, ObjectExistsError, StorageConfigError, StorageError
from studyhub.storage.naming import (
    DEFAULT_CATEGORY,
    DEFAULT_CONTENT_TYPE,
    build_key,
    generate_filename,
    safe_segment,
)

logger = logging.getLogger(__name__)


def _is_absolute_url(url: str) -> bool:
    return url.startswith("http://") or url.startswith("https://")


class StorageRouter:
    """Routes uploads through an ordered chain of backends.

    In auto mode a failed backend falls through to the next one in the chain,
    which always ends with the disk backend. In pinned mode the chain holds a
    single backend and its failures are fatal.

    Deletes are best-effort in both modes: a failure is logged and never
    reaches the caller, so a stored file may be orphaned but a record never
    loses its row because of storage.
    """

    def __init__(self, chain: list[StorageBackend], disk: StorageBackend, pinned: bool = False) -> None:
        if not chain:
            raise StorageConfigError("Storage chain must contain at least one backend")
        if pinned and len(chain) != 1:
            raise StorageConfigError("Pinned storage mode takes exactly one backend")
        self.chain = list(chain)
        self.disk = disk
        self.pinned = pinned

    @property
    def backends(self) -> list[StorageBackend]:
        """Every backend this router can address, chain order first."""
        if self.disk in self.chain:
            return list(self.chain)
        return [*self.chain, self.disk]

    def select_backend(self) -> str:
        return self.chain[0].name

    def upload(
        self,
        data: bytes,
        content_type: str = DEFAULT_CONTENT_TYPE,
        category: str = DEFAULT_CATEGORY,
        filename: str | None = None,
    ) -> StoredFile:
        category = safe_segment(category or DEFAULT_CATEGORY)
        name = safe_segment(filename) if filename else generate_filename(content_type)
        key = build_key(category, name)

        for backend in self.chain:
            try:
                url = backend.save(key, data, content_type=content_type)
            except (IOFatalError, ObjectExistsError):
                raise
            except StorageError as exc:
                if self.pinned:
                    logger.error("Upload via pinned backend %s failed: %s", backend.name, exc)
                    raise StorageConfigError(
                        f"{backend.name} upload failed and STORAGE_MODE={backend.name} is pinned: {exc}"
                    ) from exc
                logger.warning("Upload via %s failed, falling back: %s", backend.name, exc)
                continue
            logger.info("Stored %s via %s (%d bytes)", key, backend.name, len(data))
            return StoredFile(
                id=key,
                url=url,
                stored_url=backend.reference_url(key, url),
                category=category,
                filename=name,
                backend=backend.name,
            )

        raise StorageError(f"No storage backend accepted {key}")

    def _owner(self, url: str | None) -> StorageBackend | None:
        if not url:
            return None
        for backend in self.backends:
            if backend.owns_url(url):
                return backend
        return None

    def delete(self, reference: StorageReference | str | None) -> None:
        if reference is None:
            return
        if isinstance(reference, str):
            key, url = reference, None
        else:
            key, url = reference.id, reference.url
        if not key:
            return

        owner = self._owner(url)
        # Keys are unique across backends, so an unowned key is safe to try everywhere.
        targets = [owner] if owner is not None else self.backends
        for backend in targets:
            try:
                backend.delete(key)
            except Exception:
                logger.warning("Best-effort delete of %s via %s failed", key, backend.name, exc_info=True)
            else:
                logger.info("Deleted %s via %s", key, backend.name)

    def resolve_url(self, reference: StorageReference | None) -> str:
        """Absolute URL for a stored reference.

        Disk URLs are rebuilt from the current base URL on every call, including
        absolute ones minted under an earlier base URL. Remote URLs are returned
        as stored.
        """
        if reference is None or reference.is_empty:
            return ""
        url = reference.url or ""
        owner = self._owner(url)
        if owner is None and not _is_absolute_url(url):
            owner = self.disk
        if owner is not self.disk:
            return url
        resolved = self.disk.get_url(reference.id)
        logger.debug("Resolved %s via disk to %s", reference.id, resolved)
        return resolved
