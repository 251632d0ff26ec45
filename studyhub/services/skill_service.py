from __future__ import annotations

import logging

from studyhub.models.media import MediaKind, MediaUpload
from studyhub.models.skill import Skill
from studyhub.repositories.base import SkillRepository
from studyhub.services.errors import NotAuthorizedError, RecordNotFoundError
from studyhub.services.media import MediaLifecycle

logger = logging.getLogger(__name__)

CATEGORY = "skills"
EDITABLE_FIELDS = ("name", "category", "description")


class SkillService:
    def __init__(self, skill_repo: SkillRepository, media: MediaLifecycle) -> None:
        self.skill_repo = skill_repo
        self.media = media

    def _get_owned(self, uuid: str, user_id: int) -> Skill:
        skill = self.skill_repo.get_by_uuid(uuid)
        if skill is None:
            raise RecordNotFoundError("Skill not found")
        if skill.created_by != user_id:
            raise NotAuthorizedError("Not authorized to modify this skill")
        return skill

    def create_skill(
        self,
        user_id: int,
        name: str,
        category: str = "",
        description: str = "",
        thumbnail: MediaUpload | None = None,
    ) -> Skill:
        if not name:
            raise ValueError("Skill name is required")

        with self.media.staged(thumbnail, CATEGORY, MediaKind.IMAGE) as reference:
            skill = self.skill_repo.create(
                Skill(
                    name=name,
                    category=category,
                    description=description,
                    thumbnail=reference,
                    created_by=user_id,
                )
            )
        logger.info("Skill created: uuid=%s name=%s thumbnail=%s", skill.uuid, name, reference is not None)
        return skill

    def get_skill(self, uuid: str) -> Skill:
        skill = self.skill_repo.get_by_uuid(uuid)
        if skill is None:
            raise RecordNotFoundError("Skill not found")
        return skill

    def list_skills(self, category: str | None = None) -> list[Skill]:
        result = self.skill_repo.list_all(category=category)
        logger.debug("Listed %d skills category=%s", len(result), category)
        return result

    def update_skill(
        self,
        uuid: str,
        user_id: int,
        thumbnail: MediaUpload | None = None,
        **fields: str | None,
    ) -> Skill:
        skill = self._get_owned(uuid, user_id)
        changes = {name: value for name, value in fields.items() if name in EDITABLE_FIELDS and value is not None}
        if changes.get("name") == "":
            raise ValueError("Skill name cannot be empty")

        old_thumbnail = skill.thumbnail
        with self.media.staged(thumbnail, CATEGORY, MediaKind.IMAGE) as reference:
            if reference is not None:
                changes["thumbnail"] = reference
            skill = self.skill_repo.update(skill.model_copy(update=changes))

        if reference is not None:
            self.media.discard(old_thumbnail)
        logger.info("Skill updated: uuid=%s fields=%s", uuid, sorted(changes))
        return skill

    def delete_skill(self, uuid: str, user_id: int) -> None:
        skill = self._get_owned(uuid, user_id)
        self.skill_repo.delete(skill.id)
        self.media.discard(skill.thumbnail)
        logger.info("Skill deleted: uuid=%s", uuid)
