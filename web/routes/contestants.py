from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from web.deps import current_user_id, get_contestant_service, present
from web.forms import form_str, read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contestants")

FIELDS = ("name", "bio")


@router.get("")
async def contestant_list(request: Request, contest: str | None = None):
    logger.info("GET /contestants — contest=%s", contest)
    contestants = get_contestant_service(request).list_contestants(contest=contest)
    return {"success": True, "data": [present(request, contestant) for contestant in contestants]}


@router.post("", status_code=201)
async def contestant_create(request: Request):
    user_id = current_user_id(request)
    logger.info("POST /contestants — user=%s", user_id)
    form = await request.form()
    values = {name: form_str(form, name) or "" for name in FIELDS}
    image = await read_upload(form.get("image"))
    contestant = get_contestant_service(request).add_contestant(
        user_id, contest=form_str(form, "contest") or "", image=image, **values
    )
    return {"success": True, "message": "Contestant added successfully", "data": present(request, contestant)}


@router.get("/{contestant_uuid}")
async def contestant_detail(request: Request, contestant_uuid: str):
    logger.info("GET /contestants/%s", contestant_uuid)
    contestant = get_contestant_service(request).get_contestant(contestant_uuid)
    return {"success": True, "data": present(request, contestant)}


@router.put("/{contestant_uuid}")
async def contestant_update(request: Request, contestant_uuid: str):
    user_id = current_user_id(request)
    logger.info("PUT /contestants/%s — user=%s", contestant_uuid, user_id)
    form = await request.form()
    values = {name: form_str(form, name) for name in FIELDS}
    image = await read_upload(form.get("image"))
    contestant = get_contestant_service(request).update_contestant(contestant_uuid, user_id, image=image, **values)
    return {"success": True, "message": "Contestant updated successfully", "data": present(request, contestant)}


@router.delete("/{contestant_uuid}")
async def contestant_delete(request: Request, contestant_uuid: str):
    user_id = current_user_id(request)
    logger.info("DELETE /contestants/%s — user=%s", contestant_uuid, user_id)
    get_contestant_service(request).delete_contestant(contestant_uuid, user_id)
    return {"success": True, "message": "Contestant deleted successfully"}
