from __future__ import annotations

from starlette.datastructures import FormData, UploadFile

from studyhub.models.media import MediaUpload


def form_str(form: FormData, name: str) -> str | None:
    """Return a stripped text field, or None when the field was not sent."""
    value = form.get(name)
    if value is None or isinstance(value, UploadFile):
        return None
    return str(value).strip()


async def read_upload(value: object) -> MediaUpload | None:
    """Read a multipart file field into memory. Empty file inputs count as absent."""
    if not isinstance(value, UploadFile) or not value.filename:
        return None
    data = await value.read()
    return MediaUpload(
        data=data,
        content_type=value.content_type or "application/octet-stream",
        filename=value.filename,
    )


async def read_uploads(form: FormData, name: str) -> list[MediaUpload]:
    uploads = []
    for value in form.getlist(name):
        upload = await read_upload(value)
        if upload is not None:
            uploads.append(upload)
    return uploads
