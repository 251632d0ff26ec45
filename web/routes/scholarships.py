from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from studyhub.services.scholarship_service import EDITABLE_FIELDS
from web.deps import current_user_id, get_scholarship_service, present
from web.forms import form_str, read_uploads

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scholarships")


@router.get("")
async def scholarship_list(request: Request):
    logger.info("GET /scholarships")
    scholarships = get_scholarship_service(request).list_scholarships()
    return {"success": True, "data": [present(request, item) for item in scholarships]}


@router.post("", status_code=201)
async def scholarship_create(request: Request):
    user_id = current_user_id(request)
    logger.info("POST /scholarships — user=%s", user_id)
    form = await request.form()
    values = {name: form_str(form, name) or "" for name in EDITABLE_FIELDS}
    images = await read_uploads(form, "images")
    scholarship = get_scholarship_service(request).create_scholarship(user_id, images=images, **values)
    return {"success": True, "message": "Scholarship created successfully", "data": present(request, scholarship)}


@router.get("/{scholarship_uuid}")
async def scholarship_detail(request: Request, scholarship_uuid: str):
    logger.info("GET /scholarships/%s", scholarship_uuid)
    scholarship = get_scholarship_service(request).get_scholarship(scholarship_uuid)
    return {"success": True, "data": present(request, scholarship)}


@router.put("/{scholarship_uuid}")
async def scholarship_update(request: Request, scholarship_uuid: str):
    user_id = current_user_id(request)
    logger.info("PUT /scholarships/%s — user=%s", scholarship_uuid, user_id)
    form = await request.form()
    values = {name: form_str(form, name) for name in EDITABLE_FIELDS}
    images = await read_uploads(form, "images")
    scholarship = get_scholarship_service(request).update_scholarship(
        scholarship_uuid, user_id, images=images, **values
    )
    return {"success": True, "message": "Scholarship updated successfully", "data": present(request, scholarship)}


@router.delete("/{scholarship_uuid}/images")
async def scholarship_remove_image(request: Request, scholarship_uuid: str):
    user_id = current_user_id(request)
    form = await request.form()
    image = form_str(form, "image") or request.query_params.get("image", "")
    logger.info("DELETE /scholarships/%s/images — user=%s image=%s", scholarship_uuid, user_id, image)
    scholarship = get_scholarship_service(request).remove_image(scholarship_uuid, user_id, image)
    return {"success": True, "message": "Image removed successfully", "data": present(request, scholarship)}


@router.delete("/{scholarship_uuid}")
async def scholarship_delete(request: Request, scholarship_uuid: str):
    user_id = current_user_id(request)
    logger.info("DELETE /scholarships/%s — user=%s", scholarship_uuid, user_id)
    get_scholarship_service(request).delete_scholarship(scholarship_uuid, user_id)
    return {"success": True, "message": "Scholarship deleted successfully"}
