from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, model_validator


class MediaKind(str, Enum):
    IMAGE = "image"
    PDF = "pdf"
    VIDEO = "video"


class StorageReference(BaseModel):
    """The ``{id, url}`` pair a record keeps to locate its media.

    Either both fields are set or neither is.
    """

    id: str | None = None
    url: str | None = None

    @model_validator(mode="after")
    def _all_or_nothing(self) -> StorageReference:
        if bool(self.id) != bool(self.url):
            raise ValueError("Storage reference must have both id and url, or neither")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.id

    @classmethod
    def from_columns(cls, storage_id: str | None, url: str | None) -> StorageReference | None:
        if not storage_id and not url:
            return None
        return cls(id=storage_id, url=url)


class MediaUpload(BaseModel):
    """Raw bytes received from a client, before they reach storage."""

    data: bytes
    content_type: str
    filename: str = ""

    @property
    def size(self) -> int:
        return len(self.data)
