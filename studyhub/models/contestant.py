from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from studyhub.models.media import StorageReference


class Contestant(BaseModel):
    id: int | None = None
    uuid: str = ""
    contest: str
    name: str
    bio: str = ""
    image: StorageReference | None = None
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
