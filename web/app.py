from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.responses import JSONResponse

from studyhub.db import initialize_db
from studyhub.logging import configure_logging, reconfigure
from studyhub.services.errors import NotAuthorizedError, RecordNotFoundError
from studyhub.settings import settings
from studyhub.storage.errors import StorageError
from studyhub.storage.factory import StorageHolder
from web.deps import DBConnectionMiddleware
from web.routes.books import router as books_router
from web.routes.concours import router as concours_router
from web.routes.contestants import router as contestants_router
from web.routes.courses import router as courses_router
from web.routes.notifications import router as notifications_router
from web.routes.questions import router as questions_router
from web.routes.scholarships import router as scholarships_router
from web.routes.skills import router as skills_router
from web.routes.solutions import router as solutions_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    initialize_db()
    # Re-apply logging config — Alembic's fileConfig may have overridden it
    reconfigure()
    logger.info("Application started — storage backend: %s", app.state.storage.get().select_backend())
    yield


app = FastAPI(docs_url=None, redoc_url=None, lifespan=lifespan)
app.state.storage = StorageHolder()

app.add_middleware(DBConnectionMiddleware)

app.mount(
    settings.storage_url_path,
    StaticFiles(directory=settings.storage_local_path, check_dir=False),
    name="uploads",
)

app.include_router(courses_router)
app.include_router(questions_router)
app.include_router(books_router)
app.include_router(notifications_router)
app.include_router(scholarships_router)
app.include_router(skills_router)
app.include_router(concours_router)
app.include_router(solutions_router)
app.include_router(contestants_router)


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse({"success": False, "detail": detail}, status_code=status_code)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return _error(502, "Could not store file")


@app.exception_handler(RecordNotFoundError)
async def not_found_handler(request: Request, exc: RecordNotFoundError):
    return _error(404, str(exc))


@app.exception_handler(NotAuthorizedError)
async def not_authorized_handler(request: Request, exc: NotAuthorizedError):
    return _error(403, str(exc))


@app.exception_handler(ValueError)
async def bad_request_handler(request: Request, exc: ValueError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return _error(400, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error(400, "Invalid request")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return _error(500, "Internal Server Error")


@app.get("/")
async def home():
    return {"success": True, "message": "studyhub API"}
