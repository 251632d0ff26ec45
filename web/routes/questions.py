from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from studyhub.services.question_service import REQUIRED_FIELDS
from web.deps import current_user_id, get_question_service, present
from web.forms import form_str, read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions")


@router.get("")
async def question_list(
    request: Request,
    department: str | None = None,
    level: str | None = None,
    subject: str | None = None,
    year: str | None = None,
):
    logger.info("GET /questions — department=%s level=%s subject=%s year=%s", department, level, subject, year)
    questions = get_question_service(request).list_questions(
        department=department, level=level, subject=subject, year=year
    )
    return {"success": True, "data": [present(request, question) for question in questions]}


@router.post("", status_code=201)
async def question_create(request: Request):
    user_id = current_user_id(request)
    logger.info("POST /questions — user=%s", user_id)
    form = await request.form()
    values = {name: form_str(form, name) or "" for name in REQUIRED_FIELDS}
    pdf = await read_upload(form.get("pdf"))
    question = get_question_service(request).create_question(user_id, pdf=pdf, **values)
    return {"success": True, "message": "Question uploaded successfully", "data": present(request, question)}


@router.get("/{question_uuid}")
async def question_detail(request: Request, question_uuid: str):
    logger.info("GET /questions/%s", question_uuid)
    question = get_question_service(request).get_question(question_uuid)
    return {"success": True, "data": present(request, question)}


@router.put("/{question_uuid}")
async def question_update(request: Request, question_uuid: str):
    user_id = current_user_id(request)
    logger.info("PUT /questions/%s — user=%s", question_uuid, user_id)
    form = await request.form()
    values = {name: form_str(form, name) for name in REQUIRED_FIELDS}
    pdf = await read_upload(form.get("pdf"))
    question = get_question_service(request).update_question(question_uuid, user_id, pdf=pdf, **values)
    return {"success": True, "message": "Question updated successfully", "data": present(request, question)}


@router.delete("/{question_uuid}")
async def question_delete(request: Request, question_uuid: str):
    user_id = current_user_id(request)
    logger.info("DELETE /questions/%s — user=%s", question_uuid, user_id)
    get_question_service(request).delete_question(question_uuid, user_id)
    return {"success": True, "message": "Question deleted successfully"}
