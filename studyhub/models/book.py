from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from studyhub.models.media import StorageReference


class Book(BaseModel):
    id: int | None = None
    uuid: str = ""
    title: str
    author: str = ""
    description: str = ""
    pdf: StorageReference
    thumbnail: StorageReference | None = None
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
