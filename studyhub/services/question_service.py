from __future__ import annotations

import logging

from studyhub.models.media import MediaKind, MediaUpload
from studyhub.models.question import Question
from studyhub.repositories.base import QuestionRepository, SolutionRepository
from studyhub.services.errors import InvalidMediaError, NotAuthorizedError, RecordNotFoundError
from studyhub.services.media import MediaLifecycle

logger = logging.getLogger(__name__)

CATEGORY = "questions"
REQUIRED_FIELDS = ("department", "level", "subject", "year")


class QuestionService:
    def __init__(
        self,
        question_repo: QuestionRepository,
        media: MediaLifecycle,
        solution_repo: SolutionRepository | None = None,
    ) -> None:
        self.question_repo = question_repo
        self.media = media
        self.solution_repo = solution_repo

    def _get_owned(self, uuid: str, user_id: int) -> Question:
        question = self.question_repo.get_by_uuid(uuid)
        if question is None:
            raise RecordNotFoundError("Question not found")
        if question.created_by != user_id:
            raise NotAuthorizedError("Not authorized to modify this question")
        return question

    def create_question(
        self,
        user_id: int,
        department: str,
        level: str,
        subject: str,
        year: str,
        pdf: MediaUpload | None,
    ) -> Question:
        values = {"department": department, "level": level, "subject": subject, "year": year}
        missing = [name for name in REQUIRED_FIELDS if not values[name]]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")
        if pdf is None:
            raise InvalidMediaError("PDF file is required")

        with self.media.staged(pdf, CATEGORY, MediaKind.PDF) as reference:
            question = self.question_repo.create(Question(**values, pdf=reference, created_by=user_id))
        logger.info("Question created: uuid=%s subject=%s year=%s", question.uuid, subject, year)
        return question

    def get_question(self, uuid: str) -> Question:
        question = self.question_repo.get_by_uuid(uuid)
        if question is None:
            raise RecordNotFoundError("Question not found")
        return question

    def list_questions(self, **filters: str | None) -> list[Question]:
        result = self.question_repo.list_all(**{k: v for k, v in filters.items() if k in REQUIRED_FIELDS})
        logger.debug("Listed %d questions filters=%s", len(result), filters)
        return result

    def update_question(
        self,
        uuid: str,
        user_id: int,
        pdf: MediaUpload | None = None,
        **fields: str | None,
    ) -> Question:
        question = self._get_owned(uuid, user_id)
        changes = {name: value for name, value in fields.items() if name in REQUIRED_FIELDS and value}

        old_pdf = question.pdf
        with self.media.staged(pdf, CATEGORY, MediaKind.PDF) as reference:
            if reference is not None:
                changes["pdf"] = reference
            question = self.question_repo.update(question.model_copy(update=changes))

        if reference is not None:
            self.media.discard(old_pdf)
        logger.info("Question updated: uuid=%s fields=%s", uuid, sorted(changes))
        return question

    def delete_question(self, uuid: str, user_id: int) -> None:
        """Delete the question and its solutions, then their files."""
        question = self._get_owned(uuid, user_id)
        solutions = self.solution_repo.list_all(question_id=question.id) if self.solution_repo else []
        for solution in solutions:
            self.solution_repo.delete(solution.id)
        self.question_repo.delete(question.id)
        self.media.discard(question.pdf, *(solution.pdf for solution in solutions))
        logger.info("Question deleted: uuid=%s", uuid)
