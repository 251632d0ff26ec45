from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from studyhub.models.media import StorageReference


class Question(BaseModel):
    id: int | None = None
    uuid: str = ""
    department: str
    level: str
    subject: str
    year: str
    pdf: StorageReference
    created_by: int
    created_at: datetime | None = None
