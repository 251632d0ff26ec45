from __future__ import annotations

import logging

from studyhub.models.contestant import Contestant
from studyhub.models.media import MediaKind, MediaUpload
from studyhub.repositories.base import ContestantRepository
from studyhub.services.errors import NotAuthorizedError, RecordNotFoundError
from studyhub.services.media import MediaLifecycle

logger = logging.getLogger(__name__)

CATEGORY = "contestants"
EDITABLE_FIELDS = ("name", "bio")


class ContestantService:
    """Contestant profiles and their portrait images.

    Contests themselves and their voting rules live elsewhere; a contestant
    only records the identifier of the contest it entered.
    """

    def __init__(self, contestant_repo: ContestantRepository, media: MediaLifecycle) -> None:
        self.contestant_repo = contestant_repo
        self.media = media

    def _get_owned(self, uuid: str, user_id: int) -> Contestant:
        contestant = self.contestant_repo.get_by_uuid(uuid)
        if contestant is None:
            raise RecordNotFoundError("Contestant not found")
        if contestant.created_by != user_id:
            raise NotAuthorizedError("Not authorized to modify this contestant")
        return contestant

    def add_contestant(
        self,
        user_id: int,
        contest: str,
        name: str,
        bio: str = "",
        image: MediaUpload | None = None,
    ) -> Contestant:
        if not contest or not name:
            raise ValueError("Contest and contestant name are required")

        with self.media.staged(image, CATEGORY, MediaKind.IMAGE) as reference:
            contestant = self.contestant_repo.create(
                Contestant(contest=contest, name=name, bio=bio, image=reference, created_by=user_id)
            )
        logger.info("Contestant added: uuid=%s contest=%s image=%s", contestant.uuid, contest, reference is not None)
        return contestant

    def get_contestant(self, uuid: str) -> Contestant:
        contestant = self.contestant_repo.get_by_uuid(uuid)
        if contestant is None:
            raise RecordNotFoundError("Contestant not found")
        return contestant

    def list_contestants(self, contest: str | None = None) -> list[Contestant]:
        result = self.contestant_repo.list_all(contest=contest)
        logger.debug("Listed %d contestants contest=%s", len(result), contest)
        return result

    def update_contestant(
        self,
        uuid: str,
        user_id: int,
        image: MediaUpload | None = None,
        **fields: str | None,
    ) -> Contestant:
        contestant = self._get_owned(uuid, user_id)
        changes = {name: value for name, value in fields.items() if name in EDITABLE_FIELDS and value is not None}
        if changes.get("name") == "":
            raise ValueError("Contestant name cannot be empty")

        old_image = contestant.image
        with self.media.staged(image, CATEGORY, MediaKind.IMAGE) as reference:
            if reference is not None:
                changes["image"] = reference
            contestant = self.contestant_repo.update(contestant.model_copy(update=changes))

        if reference is not None:
            self.media.discard(old_image)
        logger.info("Contestant updated: uuid=%s fields=%s", uuid, sorted(changes))
        return contestant

    def delete_contestant(self, uuid: str, user_id: int) -> None:
        contestant = self._get_owned(uuid, user_id)
        self.contestant_repo.delete(contestant.id)
        self.media.discard(contestant.image)
        logger.info("Contestant deleted: uuid=%s", uuid)
