from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from studyhub.models.media import StorageReference


class Skill(BaseModel):
    id: int | None = None
    uuid: str = ""
    name: str
    category: str = ""
    description: str = ""
    thumbnail: StorageReference | None = None
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
