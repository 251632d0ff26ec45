from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from studyhub.services.concours_service import EDITABLE_FIELDS
from web.deps import current_user_id, get_concours_service, present
from web.forms import form_str, read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/concours")


@router.get("")
async def concours_list(request: Request, department: str | None = None, year: str | None = None):
    logger.info("GET /concours — department=%s year=%s", department, year)
    papers = get_concours_service(request).list_concours(department=department, year=year)
    return {"success": True, "count": len(papers), "data": [present(request, paper) for paper in papers]}


@router.post("", status_code=201)
async def concours_create(request: Request):
    user_id = current_user_id(request)
    logger.info("POST /concours — user=%s", user_id)
    form = await request.form()
    values = {name: form_str(form, name) or "" for name in EDITABLE_FIELDS}
    pdf = await read_upload(form.get("pdf"))
    paper = get_concours_service(request).create_concours(user_id, pdf=pdf, **values)
    return {"success": True, "message": "Concours uploaded successfully", "data": present(request, paper)}


@router.get("/{concours_uuid}")
async def concours_detail(request: Request, concours_uuid: str):
    logger.info("GET /concours/%s", concours_uuid)
    paper = get_concours_service(request).get_concours(concours_uuid)
    return {"success": True, "data": present(request, paper)}


@router.put("/{concours_uuid}")
async def concours_update(request: Request, concours_uuid: str):
    user_id = current_user_id(request)
    logger.info("PUT /concours/%s — user=%s", concours_uuid, user_id)
    form = await request.form()
    values = {name: form_str(form, name) for name in EDITABLE_FIELDS}
    pdf = await read_upload(form.get("pdf"))
    paper = get_concours_service(request).update_concours(concours_uuid, user_id, pdf=pdf, **values)
    return {"success": True, "message": "Concours updated successfully", "data": present(request, paper)}


@router.delete("/{concours_uuid}")
async def concours_delete(request: Request, concours_uuid: str):
    user_id = current_user_id(request)
    logger.info("DELETE /concours/%s — user=%s", concours_uuid, user_id)
    get_concours_service(request).delete_concours(concours_uuid, user_id)
    return {"success": True, "message": "Concours deleted successfully"}
