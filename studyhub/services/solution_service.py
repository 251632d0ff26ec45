from __future__ import annotations

import logging

from studyhub.models.media import MediaKind, MediaUpload
from studyhub.models.solution import Solution
from studyhub.repositories.base import QuestionRepository, SolutionRepository
from studyhub.services.errors import InvalidMediaError, NotAuthorizedError, RecordNotFoundError
from studyhub.services.media import MediaLifecycle

logger = logging.getLogger(__name__)

CATEGORY = "solutions"


def _check_youtube_url(youtube_url: str | None) -> str | None:
    if not youtube_url:
        return None
    if not youtube_url.startswith(("http://", "https://")):
        raise ValueError("Please provide a valid YouTube URL")
    return youtube_url


class SolutionService:
    """Solutions to past questions.

    A solution always keeps at least one of its YouTube link or its PDF.
    """

    def __init__(
        self,
        solution_repo: SolutionRepository,
        question_repo: QuestionRepository,
        media: MediaLifecycle,
    ) -> None:
        self.solution_repo = solution_repo
        self.question_repo = question_repo
        self.media = media

    def _get_owned(self, uuid: str, user_id: int) -> Solution:
        solution = self.solution_repo.get_by_uuid(uuid)
        if solution is None:
            raise RecordNotFoundError("Solution not found")
        if solution.created_by != user_id:
            raise NotAuthorizedError("Not authorized to modify this solution")
        return solution

    def upload_solution(
        self,
        user_id: int,
        question_uuid: str,
        youtube_url: str | None = None,
        pdf: MediaUpload | None = None,
    ) -> Solution:
        if not question_uuid:
            raise ValueError("Question ID is required")
        question = self.question_repo.get_by_uuid(question_uuid)
        if question is None:
            raise RecordNotFoundError("Question not found")
        youtube_url = _check_youtube_url(youtube_url)
        if youtube_url is None and pdf is None:
            raise InvalidMediaError("Either YouTube URL or PDF file must be provided")

        with self.media.staged(pdf, CATEGORY, MediaKind.PDF) as reference:
            solution = self.solution_repo.create(
                Solution(question_id=question.id, youtube_url=youtube_url, pdf=reference, created_by=user_id)
            )
        logger.info(
            "Solution uploaded: uuid=%s question=%s pdf=%s youtube=%s",
            solution.uuid,
            question_uuid,
            reference is not None,
            youtube_url is not None,
        )
        return solution

    def get_solution(self, uuid: str) -> Solution:
        solution = self.solution_repo.get_by_uuid(uuid)
        if solution is None:
            raise RecordNotFoundError("Solution not found")
        return solution

    def list_solutions(self, question_uuid: str | None = None) -> list[Solution]:
        question_id = None
        if question_uuid:
            question = self.question_repo.get_by_uuid(question_uuid)
            if question is None:
                return []
            question_id = question.id
        result = self.solution_repo.list_all(question_id=question_id)
        logger.debug("Listed %d solutions question=%s", len(result), question_uuid)
        return result

    def update_solution(
        self,
        uuid: str,
        user_id: int,
        youtube_url: str | None = None,
        pdf: MediaUpload | None = None,
    ) -> Solution:
        """Replace the PDF and/or the YouTube link. An empty link clears it."""
        solution = self._get_owned(uuid, user_id)
        changes: dict = {}
        if youtube_url is not None:
            changes["youtube_url"] = _check_youtube_url(youtube_url)
        remaining_url = changes.get("youtube_url", solution.youtube_url)
        if remaining_url is None and pdf is None and solution.pdf is None:
            raise InvalidMediaError("Either YouTube URL or PDF file must be provided")

        old_pdf = solution.pdf
        with self.media.staged(pdf, CATEGORY, MediaKind.PDF) as reference:
            if reference is not None:
                changes["pdf"] = reference
            solution = self.solution_repo.update(solution.model_copy(update=changes))

        if reference is not None:
            self.media.discard(old_pdf)
        logger.info("Solution updated: uuid=%s fields=%s", uuid, sorted(changes))
        return solution

    def delete_solution(self, uuid: str, user_id: int) -> None:
        solution = self._get_owned(uuid, user_id)
        self.solution_repo.delete(solution.id)
        self.media.discard(solution.pdf)
        logger.info("Solution deleted: uuid=%s", uuid)
