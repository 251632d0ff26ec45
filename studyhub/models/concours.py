from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from studyhub.models.media import StorageReference


class Concours(BaseModel):
    """A past entrance-exam paper for a department and year."""

    id: int | None = None
    uuid: str = ""
    title: str
    description: str = ""
    year: str
    department: str
    pdf: StorageReference
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
