from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, model_validator

from studyhub.models.media import StorageReference


class NotificationMedia(str, Enum):
    THUMBNAIL = "thumbnail"
    VIDEO = "video"


class Notification(BaseModel):
    """A notification carries exactly one media representation: a thumbnail or a video."""

    id: int | None = None
    uuid: str = ""
    title: str
    description: str
    thumbnail: StorageReference | None = None
    video: StorageReference | None = None
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def _exactly_one_media(self) -> Notification:
        has_thumbnail = self.thumbnail is not None and not self.thumbnail.is_empty
        has_video = self.video is not None and not self.video.is_empty
        if not has_thumbnail and not has_video:
            raise ValueError("Notification must have either a thumbnail or a video")
        if has_thumbnail and has_video:
            raise ValueError("Notification cannot have both thumbnail and video")
        return self

    @property
    def media_type(self) -> NotificationMedia:
        return NotificationMedia.THUMBNAIL if self.thumbnail is not None else NotificationMedia.VIDEO

    @property
    def media(self) -> StorageReference:
        return self.thumbnail if self.thumbnail is not None else self.video
