from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator, model_validator

from studyhub.models.media import StorageReference


class Solution(BaseModel):
    """Worked answer to a past question: a YouTube link, a PDF, or both."""

    id: int | None = None
    uuid: str = ""
    question_id: int
    question_uuid: str = ""
    youtube_url: str | None = None
    pdf: StorageReference | None = None
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("youtube_url")
    @classmethod
    def _http_url(cls, value: str | None) -> str | None:
        if not value:
            return None
        if not value.startswith(("http://", "https://")):
            raise ValueError("Please provide a valid YouTube URL")
        return value

    @model_validator(mode="after")
    def _has_content(self) -> Solution:
        if not self.youtube_url and (self.pdf is None or self.pdf.is_empty):
            raise ValueError("Either YouTube URL or PDF file must be provided")
        return self
