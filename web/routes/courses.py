from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from web.deps import current_user_id, get_course_service, present
from web.forms import form_str, read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses")

FIELDS = ("title", "code", "description", "level", "department", "instructor")


@router.get("")
async def course_list(request: Request, department: str | None = None, level: str | None = None):
    logger.info("GET /courses — department=%s level=%s", department, level)
    courses = get_course_service(request).list_courses(department=department, level=level)
    return {"success": True, "data": [present(request, course) for course in courses]}


@router.post("", status_code=201)
async def course_create(request: Request):
    user_id = current_user_id(request)
    logger.info("POST /courses — user=%s", user_id)
    form = await request.form()
    values = {name: form_str(form, name) or "" for name in FIELDS}
    thumbnail = await read_upload(form.get("thumbnail"))
    course = get_course_service(request).create_course(user_id, thumbnail=thumbnail, **values)
    logger.info("Course created via web: uuid=%s", course.uuid)
    return {"success": True, "message": "Course created successfully", "data": present(request, course)}


@router.get("/{course_uuid}")
async def course_detail(request: Request, course_uuid: str):
    logger.info("GET /courses/%s", course_uuid)
    course = get_course_service(request).get_course(course_uuid)
    return {"success": True, "data": present(request, course)}


@router.put("/{course_uuid}")
async def course_update(request: Request, course_uuid: str):
    user_id = current_user_id(request)
    logger.info("PUT /courses/%s — user=%s", course_uuid, user_id)
    form = await request.form()
    values = {name: form_str(form, name) for name in FIELDS}
    thumbnail = await read_upload(form.get("thumbnail"))
    course = get_course_service(request).update_course(course_uuid, user_id, thumbnail=thumbnail, **values)
    return {"success": True, "message": "Course updated successfully", "data": present(request, course)}


@router.delete("/{course_uuid}")
async def course_delete(request: Request, course_uuid: str):
    user_id = current_user_id(request)
    logger.info("DELETE /courses/%s — user=%s", course_uuid, user_id)
    get_course_service(request).delete_course(course_uuid, user_id)
    return {"success": True, "message": "Course deleted successfully"}
