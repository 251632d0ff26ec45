from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from web.deps import current_user_id, get_skill_service, present
from web.forms import form_str, read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/skills")

FIELDS = ("name", "category", "description")


@router.get("")
async def skill_list(request: Request, category: str | None = None):
    logger.info("GET /skills — category=%s", category)
    skills = get_skill_service(request).list_skills(category=category)
    return {"success": True, "count": len(skills), "data": [present(request, skill) for skill in skills]}


@router.post("", status_code=201)
async def skill_create(request: Request):
    user_id = current_user_id(request)
    logger.info("POST /skills — user=%s", user_id)
    form = await request.form()
    values = {name: form_str(form, name) or "" for name in FIELDS}
    thumbnail = await read_upload(form.get("thumbnail"))
    skill = get_skill_service(request).create_skill(user_id, thumbnail=thumbnail, **values)
    return {"success": True, "message": "Skill created successfully", "data": present(request, skill)}


@router.get("/{skill_uuid}")
async def skill_detail(request: Request, skill_uuid: str):
    logger.info("GET /skills/%s", skill_uuid)
    skill = get_skill_service(request).get_skill(skill_uuid)
    return {"success": True, "data": present(request, skill)}


@router.put("/{skill_uuid}")
async def skill_update(request: Request, skill_uuid: str):
    user_id = current_user_id(request)
    logger.info("PUT /skills/%s — user=%s", skill_uuid, user_id)
    form = await request.form()
    values = {name: form_str(form, name) for name in FIELDS}
    thumbnail = await read_upload(form.get("thumbnail"))
    skill = get_skill_service(request).update_skill(skill_uuid, user_id, thumbnail=thumbnail, **values)
    return {"success": True, "message": "Skill updated successfully", "data": present(request, skill)}


@router.delete("/{skill_uuid}")
async def skill_delete(request: Request, skill_uuid: str):
    user_id = current_user_id(request)
    logger.info("DELETE /skills/%s — user=%s", skill_uuid, user_id)
    get_skill_service(request).delete_skill(skill_uuid, user_id)
    return {"success": True, "message": "Skill deleted successfully"}
