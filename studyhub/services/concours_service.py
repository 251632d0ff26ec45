from __future__ import annotations

import logging

from studyhub.models.concours import Concours
from studyhub.models.media import MediaKind, MediaUpload
from studyhub.repositories.base import ConcoursRepository
from studyhub.services.errors import InvalidMediaError, NotAuthorizedError, RecordNotFoundError
from studyhub.services.media import MediaLifecycle

logger = logging.getLogger(__name__)

CATEGORY = "concours"
REQUIRED_FIELDS = ("title", "year", "department")
EDITABLE_FIELDS = ("title", "description", "year", "department")


class ConcoursService:
    def __init__(self, concours_repo: ConcoursRepository, media: MediaLifecycle) -> None:
        self.concours_repo = concours_repo
        self.media = media

    def _get_owned(self, uuid: str, user_id: int) -> Concours:
        concours = self.concours_repo.get_by_uuid(uuid)
        if concours is None:
            raise RecordNotFoundError("Concours not found")
        if concours.created_by != user_id:
            raise NotAuthorizedError("Not authorized to modify this concours")
        return concours

    def create_concours(
        self,
        user_id: int,
        title: str,
        year: str,
        department: str,
        pdf: MediaUpload | None,
        description: str = "",
    ) -> Concours:
        if not title or not year or not department:
            raise ValueError("Title, year, and department are required")
        if pdf is None:
            raise InvalidMediaError("PDF file is required")

        with self.media.staged(pdf, CATEGORY, MediaKind.PDF) as reference:
            concours = self.concours_repo.create(
                Concours(
                    title=title,
                    description=description,
                    year=year,
                    department=department,
                    pdf=reference,
                    created_by=user_id,
                )
            )
        logger.info("Concours created: uuid=%s department=%s year=%s", concours.uuid, department, year)
        return concours

    def get_concours(self, uuid: str) -> Concours:
        concours = self.concours_repo.get_by_uuid(uuid)
        if concours is None:
            raise RecordNotFoundError("Concours not found")
        return concours

    def list_concours(self, department: str | None = None, year: str | None = None) -> list[Concours]:
        result = self.concours_repo.list_all(department=department, year=year)
        logger.debug("Listed %d concours department=%s year=%s", len(result), department, year)
        return result

    def update_concours(
        self,
        uuid: str,
        user_id: int,
        pdf: MediaUpload | None = None,
        **fields: str | None,
    ) -> Concours:
        concours = self._get_owned(uuid, user_id)
        changes = {name: value for name, value in fields.items() if name in EDITABLE_FIELDS and value is not None}
        # Blank values for required fields are ignored rather than clearing them.
        changes = {name: value for name, value in changes.items() if value or name not in REQUIRED_FIELDS}

        old_pdf = concours.pdf
        with self.media.staged(pdf, CATEGORY, MediaKind.PDF) as reference:
            if reference is not None:
                changes["pdf"] = reference
            concours = self.concours_repo.update(concours.model_copy(update=changes))

        if reference is not None:
            self.media.discard(old_pdf)
        logger.info("Concours updated: uuid=%s fields=%s", uuid, sorted(changes))
        return concours

    def delete_concours(self, uuid: str, user_id: int) -> None:
        concours = self._get_owned(uuid, user_id)
        self.concours_repo.delete(concours.id)
        self.media.discard(concours.pdf)
        logger.info("Concours deleted: uuid=%s", uuid)
