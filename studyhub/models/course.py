from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from studyhub.models.media import StorageReference


class Course(BaseModel):
    id: int | None = None
    uuid: str = ""
    title: str
    code: str = ""
    description: str = ""
    level: str = ""
    department: str
    instructor: str = ""
    thumbnail: StorageReference | None = None
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
