from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from web.deps import current_user_id, get_book_service, present
from web.forms import form_str, read_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books")

FIELDS = ("title", "author", "description")


@router.get("")
async def book_list(request: Request):
    logger.info("GET /books")
    books = get_book_service(request).list_books()
    return {"success": True, "data": [present(request, book) for book in books]}


@router.post("", status_code=201)
async def book_create(request: Request):
    user_id = current_user_id(request)
    logger.info("POST /books — user=%s", user_id)
    form = await request.form()
    values = {name: form_str(form, name) or "" for name in FIELDS}
    pdf = await read_upload(form.get("pdf"))
    thumbnail = await read_upload(form.get("thumbnail"))
    book = get_book_service(request).create_book(user_id, pdf=pdf, thumbnail=thumbnail, **values)
    return {"success": True, "message": "Book added successfully", "data": present(request, book)}


@router.get("/{book_uuid}")
async def book_detail(request: Request, book_uuid: str):
    logger.info("GET /books/%s", book_uuid)
    book = get_book_service(request).get_book(book_uuid)
    return {"success": True, "data": present(request, book)}


@router.put("/{book_uuid}")
async def book_update(request: Request, book_uuid: str):
    user_id = current_user_id(request)
    logger.info("PUT /books/%s — user=%s", book_uuid, user_id)
    form = await request.form()
    values = {name: form_str(form, name) for name in FIELDS}
    pdf = await read_upload(form.get("pdf"))
    thumbnail = await read_upload(form.get("thumbnail"))
    book = get_book_service(request).update_book(book_uuid, user_id, pdf=pdf, thumbnail=thumbnail, **values)
    return {"success": True, "message": "Book updated successfully", "data": present(request, book)}


@router.delete("/{book_uuid}")
async def book_delete(request: Request, book_uuid: str):
    user_id = current_user_id(request)
    logger.info("DELETE /books/%s — user=%s", book_uuid, user_id)
    get_book_service(request).delete_book(book_uuid, user_id)
    return {"success": True, "message": "Book deleted successfully"}
