from __future__ import annotations

import logging

from studyhub.models.media import MediaKind, MediaUpload
from studyhub.models.scholarship import Scholarship, ScholarshipImage
from studyhub.repositories.base import ScholarshipRepository
from studyhub.services.errors import InvalidMediaError, NotAuthorizedError, RecordNotFoundError
from studyhub.services.media import MediaLifecycle
from studyhub.settings import settings

logger = logging.getLogger(__name__)

CATEGORY = "scholarships"
EDITABLE_FIELDS = ("organization_name", "description", "location", "website_link")


class ScholarshipService:
    def __init__(self, scholarship_repo: ScholarshipRepository, media: MediaLifecycle) -> None:
        self.scholarship_repo = scholarship_repo
        self.media = media

    def _get_owned(self, uuid: str, user_id: int) -> Scholarship:
        scholarship = self.scholarship_repo.get_by_uuid(uuid)
        if scholarship is None:
            raise RecordNotFoundError("Scholarship not found")
        if scholarship.created_by != user_id:
            raise NotAuthorizedError("Not authorized to modify this scholarship")
        return scholarship

    @staticmethod
    def _check_image_count(images: list[MediaUpload]) -> None:
        if len(images) > settings.max_images_per_request:
            raise InvalidMediaError(f"At most {settings.max_images_per_request} images per request")

    def create_scholarship(
        self,
        user_id: int,
        organization_name: str,
        description: str,
        location: str,
        website_link: str,
        images: list[MediaUpload],
    ) -> Scholarship:
        if not all((organization_name, description, location, website_link)):
            raise ValueError(
                "Please provide all required fields: organization_name, description, location, website_link"
            )
        if not images:
            raise InvalidMediaError("At least one image is required")
        self._check_image_count(images)

        # Validates website_link before anything is uploaded.
        draft = Scholarship(
            organization_name=organization_name,
            description=description,
            location=location,
            website_link=website_link,
            created_by=user_id,
        )
        with self.media.staged_many(images, CATEGORY, MediaKind.IMAGE) as references:
            draft.images = [
                ScholarshipImage(storage_id=ref.id, url=ref.url, sort_order=i) for i, ref in enumerate(references)
            ]
            scholarship = self.scholarship_repo.create(draft)
        logger.info("Scholarship created: uuid=%s images=%d", scholarship.uuid, len(scholarship.images))
        return scholarship

    def get_scholarship(self, uuid: str) -> Scholarship:
        scholarship = self.scholarship_repo.get_by_uuid(uuid)
        if scholarship is None:
            raise RecordNotFoundError("Scholarship not found")
        return scholarship

    def list_scholarships(self) -> list[Scholarship]:
        return self.scholarship_repo.list_all()

    def update_scholarship(
        self,
        uuid: str,
        user_id: int,
        images: list[MediaUpload] | None = None,
        **fields: str | None,
    ) -> Scholarship:
        """Update fields and append new images to the existing set."""
        scholarship = self._get_owned(uuid, user_id)
        images = images or []
        self._check_image_count(images)
        changes = {name: value for name, value in fields.items() if name in EDITABLE_FIELDS and value}
        candidate = Scholarship.model_validate({**scholarship.model_dump(), **changes})

        with self.media.staged_many(images, CATEGORY, MediaKind.IMAGE) as references:
            candidate.images = [
                *candidate.images,
                *(ScholarshipImage(storage_id=ref.id, url=ref.url) for ref in references),
            ]
            updated = self.scholarship_repo.update(candidate)
        logger.info("Scholarship updated: uuid=%s fields=%s new_images=%d", uuid, sorted(changes), len(images))
        return updated

    def remove_image(self, uuid: str, user_id: int, image: str) -> Scholarship:
        """Remove one image matched by storage id or URL.

        Unlike single-reference deletes, a missing entry is an error: the set is
        checked before anything is touched.
        """
        if not image:
            raise ValueError("Image id or URL is required")
        scholarship = self._get_owned(uuid, user_id)
        entry = scholarship.find_image(image)
        if entry is None:
            raise RecordNotFoundError("Image not found")

        self.scholarship_repo.remove_image(entry.id)
        self.media.discard(entry.reference)
        logger.info("Scholarship image removed: uuid=%s image=%s", uuid, entry.storage_id)
        return self.get_scholarship(uuid)

    def delete_scholarship(self, uuid: str, user_id: int) -> None:
        scholarship = self._get_owned(uuid, user_id)
        self.scholarship_repo.delete(scholarship.id)
        self.media.discard(*(image.reference for image in scholarship.images))
        logger.info("Scholarship deleted: uuid=%s images=%d", uuid, len(scholarship.images))
