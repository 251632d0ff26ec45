from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from pydantic import BaseModel
from starlette.types import ASGIApp, Receive, Scope, Send

from studyhub.db import get_engine
from studyhub.models.media import StorageReference
from studyhub.repositories.sqlalchemy import (
    SQLAlchemyBookRepository,
    SQLAlchemyConcoursRepository,
    SQLAlchemyContestantRepository,
    SQLAlchemyCourseRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyQuestionRepository,
    SQLAlchemyScholarshipRepository,
    SQLAlchemySkillRepository,
    SQLAlchemySolutionRepository,
)
from studyhub.services.book_service import BookService
from studyhub.services.concours_service import ConcoursService
from studyhub.services.contestant_service import ContestantService
from studyhub.services.course_service import CourseService
from studyhub.services.media import MediaLifecycle
from studyhub.services.notification_service import NotificationService
from studyhub.services.question_service import QuestionService
from studyhub.services.scholarship_service import ScholarshipService
from studyhub.services.skill_service import SkillService
from studyhub.services.solution_service import SolutionService
from studyhub.storage.router import StorageRouter

logger = logging.getLogger(__name__)

USER_HEADER = "X-User-Id"


class DBConnectionMiddleware:
    """Pure ASGI middleware — creates a single DB connection per request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request.state.db_conn = None
        try:
            await self.app(scope, receive, send)
        finally:
            conn = getattr(request.state, "db_conn", None)
            if conn is not None:
                conn.close()
                logger.debug("DB connection closed for %s %s", request.method, request.url.path)


def _get_conn(request: Request):
    """Lazy per-request connection — created on first use, closed by middleware."""
    if request.state.db_conn is None:
        logger.debug("Creating DB connection for %s %s", request.method, request.url.path)
        request.state.db_conn = get_engine().connect()
    return request.state.db_conn


def current_user_id(request: Request) -> int:
    """Identity set by the authentication gateway in front of this service."""
    raw = request.headers.get(USER_HEADER, "")
    try:
        return int(raw)
    except ValueError:
        logger.info("Rejected %s %s — missing or invalid %s", request.method, request.url.path, USER_HEADER)
        raise HTTPException(status_code=401, detail="Authentication required") from None


def get_storage(request: Request) -> StorageRouter:
    return request.app.state.storage.get()


def get_media(request: Request) -> MediaLifecycle:
    return MediaLifecycle(get_storage(request))


def get_course_service(request: Request) -> CourseService:
    return CourseService(SQLAlchemyCourseRepository(_get_conn(request)), get_media(request))


def get_question_service(request: Request) -> QuestionService:
    conn = _get_conn(request)
    return QuestionService(SQLAlchemyQuestionRepository(conn), get_media(request), SQLAlchemySolutionRepository(conn))


def get_book_service(request: Request) -> BookService:
    return BookService(SQLAlchemyBookRepository(_get_conn(request)), get_media(request))


def get_notification_service(request: Request) -> NotificationService:
    return NotificationService(SQLAlchemyNotificationRepository(_get_conn(request)), get_media(request))


def get_scholarship_service(request: Request) -> ScholarshipService:
    return ScholarshipService(SQLAlchemyScholarshipRepository(_get_conn(request)), get_media(request))


def get_skill_service(request: Request) -> SkillService:
    return SkillService(SQLAlchemySkillRepository(_get_conn(request)), get_media(request))


def get_concours_service(request: Request) -> ConcoursService:
    return ConcoursService(SQLAlchemyConcoursRepository(_get_conn(request)), get_media(request))


def get_solution_service(request: Request) -> SolutionService:
    conn = _get_conn(request)
    return SolutionService(
        SQLAlchemySolutionRepository(conn), SQLAlchemyQuestionRepository(conn), get_media(request)
    )


def get_contestant_service(request: Request) -> ContestantService:
    return ContestantService(SQLAlchemyContestantRepository(_get_conn(request)), get_media(request))


def present(request: Request, model: BaseModel) -> dict:
    """Dump a record for JSON, resolving every media URL against current configuration."""
    storage = get_storage(request)
    data = model.model_dump(mode="json")
    for name, value in model:
        if isinstance(value, StorageReference):
            data[name]["url"] = storage.resolve_url(value)
    if "images" in data:
        for image in data["images"]:
            image["url"] = storage.resolve_url(StorageReference(id=image["storage_id"], url=image["url"]))
    return data
