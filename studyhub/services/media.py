"""Couples a record's media references to storage calls.

Every service that owns files follows the same order of operations:

* create: upload first, persist the record only once the upload succeeded;
* replace: upload the new file, persist the new reference, then delete the old one;
* delete: remove the record, then delete its files best-effort.

``staged`` wraps the middle step so a failed persist never leaves a freshly
uploaded file behind.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from studyhub.models.media import MediaKind, MediaUpload, StorageReference
from studyhub.services.errors import InvalidMediaError
from studyhub.settings import settings
from studyhub.storage.router import StorageRouter

logger = logging.getLogger(__name__)

KIND_PREFIXES = {
    MediaKind.IMAGE: "image/",
    MediaKind.VIDEO: "video/",
}


def validate_upload(upload: MediaUpload, kind: MediaKind) -> None:
    if not upload.data:
        raise InvalidMediaError("Empty file")

    content_type = upload.content_type.split(";", 1)[0].strip().lower()
    if kind == MediaKind.PDF:
        if content_type != "application/pdf":
            raise InvalidMediaError(f"Only PDF files are allowed, got {content_type or 'unknown'}")
    elif not content_type.startswith(KIND_PREFIXES[kind]):
        raise InvalidMediaError(f"Only {kind.value} files are allowed, got {content_type or 'unknown'}")

    limit = settings.max_upload_size if kind == MediaKind.IMAGE else settings.max_document_size
    if upload.size > limit:
        raise InvalidMediaError(f"File too large: {upload.size} bytes (max {limit} bytes)")


class MediaLifecycle:
    def __init__(self, storage: StorageRouter) -> None:
        self.storage = storage

    def store(self, upload: MediaUpload, category: str, kind: MediaKind) -> StorageReference:
        validate_upload(upload, kind)
        stored = self.storage.upload(upload.data, content_type=upload.content_type, category=category)
        logger.info("Stored %s %s via %s", kind.value, stored.id, stored.backend)
        return stored.to_reference()

    def store_many(self, uploads: list[MediaUpload], category: str, kind: MediaKind) -> list[StorageReference]:
        """Upload every file or none: earlier uploads are discarded if a later one fails."""
        for upload in uploads:
            validate_upload(upload, kind)
        stored: list[StorageReference] = []
        try:
            for upload in uploads:
                stored.append(self.store(upload, category, kind))
        except Exception:
            self.discard(*stored)
            raise
        return stored

    @contextmanager
    def staged(
        self, upload: MediaUpload | None, category: str, kind: MediaKind
    ) -> Iterator[StorageReference | None]:
        """Yield the new reference; delete the uploaded file if the block raises."""
        if upload is None:
            yield None
            return
        reference = self.store(upload, category, kind)
        try:
            yield reference
        except Exception:
            logger.warning("Persist failed after storing %s, discarding it", reference.id)
            self.discard(reference)
            raise

    @contextmanager
    def staged_many(
        self, uploads: list[MediaUpload], category: str, kind: MediaKind
    ) -> Iterator[list[StorageReference]]:
        references = self.store_many(uploads, category, kind) if uploads else []
        try:
            yield references
        except Exception:
            self.discard(*references)
            raise

    def discard(self, *references: StorageReference | None) -> None:
        """Best-effort delete; storage failures are logged by the router and never raised."""
        for reference in references:
            if reference is None or reference.is_empty:
                continue
            self.storage.delete(reference)

    def url_for(self, reference: StorageReference | None) -> str:
        return self.storage.resolve_url(reference)
