from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from web.deps import current_user_id, get_solution_service, present
from web.forms import form_str, read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/solutions")


@router.get("")
async def solution_list(request: Request, question: str | None = None):
    logger.info("GET /solutions — question=%s", question)
    solutions = get_solution_service(request).list_solutions(question_uuid=question)
    return {"success": True, "count": len(solutions), "data": [present(request, s) for s in solutions]}


@router.post("", status_code=201)
async def solution_create(request: Request):
    user_id = current_user_id(request)
    logger.info("POST /solutions — user=%s", user_id)
    form = await request.form()
    pdf = await read_upload(form.get("pdf"))
    solution = get_solution_service(request).upload_solution(
        user_id,
        question_uuid=form_str(form, "question") or "",
        youtube_url=form_str(form, "youtube_url"),
        pdf=pdf,
    )
    return {"success": True, "message": "Solution uploaded successfully", "data": present(request, solution)}


@router.get("/{solution_uuid}")
async def solution_detail(request: Request, solution_uuid: str):
    logger.info("GET /solutions/%s", solution_uuid)
    solution = get_solution_service(request).get_solution(solution_uuid)
    return {"success": True, "data": present(request, solution)}


@router.put("/{solution_uuid}")
async def solution_update(request: Request, solution_uuid: str):
    user_id = current_user_id(request)
    logger.info("PUT /solutions/%s — user=%s", solution_uuid, user_id)
    form = await request.form()
    pdf = await read_upload(form.get("pdf"))
    solution = get_solution_service(request).update_solution(
        solution_uuid, user_id, youtube_url=form_str(form, "youtube_url"), pdf=pdf
    )
    return {"success": True, "message": "Solution updated successfully", "data": present(request, solution)}


@router.delete("/{solution_uuid}")
async def solution_delete(request: Request, solution_uuid: str):
    user_id = current_user_id(request)
    logger.info("DELETE /solutions/%s — user=%s", solution_uuid, user_id)
    get_solution_service(request).delete_solution(solution_uuid, user_id)
    return {"success": True, "message": "Solution deleted successfully"}
