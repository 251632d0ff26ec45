from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from web.deps import current_user_id, get_notification_service, present
from web.forms import form_str, read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications")


@router.get("")
async def notification_list(request: Request):
    logger.info("GET /notifications")
    notifications = get_notification_service(request).list_notifications()
    return {"success": True, "data": [present(request, item) for item in notifications]}


@router.post("", status_code=201)
async def notification_create(request: Request):
    user_id = current_user_id(request)
    logger.info("POST /notifications — user=%s", user_id)
    form = await request.form()
    media = await read_upload(form.get("media"))
    notification = get_notification_service(request).create_notification(
        user_id,
        title=form_str(form, "title") or "",
        description=form_str(form, "description") or "",
        media_type=form_str(form, "media_type"),
        media=media,
    )
    return {"success": True, "message": "Notification created successfully", "data": present(request, notification)}


@router.get("/{notification_uuid}")
async def notification_detail(request: Request, notification_uuid: str):
    logger.info("GET /notifications/%s", notification_uuid)
    notification = get_notification_service(request).get_notification(notification_uuid)
    return {"success": True, "data": present(request, notification)}


@router.put("/{notification_uuid}")
async def notification_update(request: Request, notification_uuid: str):
    user_id = current_user_id(request)
    logger.info("PUT /notifications/%s — user=%s", notification_uuid, user_id)
    form = await request.form()
    media = await read_upload(form.get("media"))
    notification = get_notification_service(request).update_notification(
        notification_uuid,
        user_id,
        title=form_str(form, "title"),
        description=form_str(form, "description"),
        media_type=form_str(form, "media_type"),
        media=media,
    )
    return {"success": True, "message": "Notification updated successfully", "data": present(request, notification)}


@router.delete("/{notification_uuid}")
async def notification_delete(request: Request, notification_uuid: str):
    user_id = current_user_id(request)
    logger.info("DELETE /notifications/%s — user=%s", notification_uuid, user_id)
    get_notification_service(request).delete_notification(notification_uuid, user_id)
    return {"success": True, "message": "Notification deleted successfully"}
