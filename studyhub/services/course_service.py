from __future__ import annotations

import logging

from studyhub.models.course import Course
from studyhub.models.media import MediaKind, MediaUpload
from studyhub.repositories.base import CourseRepository
from studyhub.services.errors import NotAuthorizedError, RecordNotFoundError
from studyhub.services.media import MediaLifecycle

logger = logging.getLogger(__name__)

CATEGORY = "courses"
EDITABLE_FIELDS = ("title", "code", "description", "level", "department", "instructor")


class CourseService:
    def __init__(self, course_repo: CourseRepository, media: MediaLifecycle) -> None:
        self.course_repo = course_repo
        self.media = media

    def _get_owned(self, uuid: str, user_id: int) -> Course:
        course = self.course_repo.get_by_uuid(uuid)
        if course is None:
            raise RecordNotFoundError("Course not found")
        if course.created_by != user_id:
            raise NotAuthorizedError("Not authorized to modify this course")
        return course

    def create_course(
        self,
        user_id: int,
        title: str,
        department: str,
        code: str = "",
        description: str = "",
        level: str = "",
        instructor: str = "",
        thumbnail: MediaUpload | None = None,
    ) -> Course:
        if not title or not department:
            raise ValueError("Course title and department are required")

        with self.media.staged(thumbnail, CATEGORY, MediaKind.IMAGE) as reference:
            course = self.course_repo.create(
                Course(
                    title=title,
                    code=code,
                    description=description,
                    level=level,
                    department=department,
                    instructor=instructor,
                    thumbnail=reference,
                    created_by=user_id,
                )
            )
        logger.info("Course created: uuid=%s title=%s thumbnail=%s", course.uuid, title, reference is not None)
        return course

    def get_course(self, uuid: str) -> Course:
        course = self.course_repo.get_by_uuid(uuid)
        if course is None:
            raise RecordNotFoundError("Course not found")
        return course

    def list_courses(self, department: str | None = None, level: str | None = None) -> list[Course]:
        result = self.course_repo.list_all(department=department, level=level)
        logger.debug("Listed %d courses department=%s level=%s", len(result), department, level)
        return result

    def update_course(
        self,
        uuid: str,
        user_id: int,
        thumbnail: MediaUpload | None = None,
        **fields: str | None,
    ) -> Course:
        course = self._get_owned(uuid, user_id)
        changes = {name: value for name, value in fields.items() if name in EDITABLE_FIELDS and value is not None}
        if changes.get("title") == "" or changes.get("department") == "":
            raise ValueError("Course title and department cannot be empty")

        old_thumbnail = course.thumbnail
        with self.media.staged(thumbnail, CATEGORY, MediaKind.IMAGE) as reference:
            if reference is not None:
                changes["thumbnail"] = reference
            course = self.course_repo.update(course.model_copy(update=changes))

        if reference is not None:
            self.media.discard(old_thumbnail)
        logger.info("Course updated: uuid=%s fields=%s", uuid, sorted(changes))
        return course

    def delete_course(self, uuid: str, user_id: int) -> None:
        course = self._get_owned(uuid, user_id)
        self.course_repo.delete(course.id)
        self.media.discard(course.thumbnail)
        logger.info("Course deleted: uuid=%s", uuid)
