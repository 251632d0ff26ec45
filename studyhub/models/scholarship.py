from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from studyhub.models.media import StorageReference


class ScholarshipImage(BaseModel):
    id: int | None = None
    scholarship_id: int | None = None
    storage_id: str
    url: str
    sort_order: int = 0

    @property
    def reference(self) -> StorageReference:
        return StorageReference(id=self.storage_id, url=self.url)

    def matches(self, image: str) -> bool:
        # Clients may send back the resolved absolute URL of a disk image.
        return image in (self.storage_id, self.url) or image.endswith(f"/{self.storage_id}")


class Scholarship(BaseModel):
    id: int | None = None
    uuid: str = ""
    organization_name: str
    description: str
    location: str
    website_link: str
    images: list[ScholarshipImage] = []
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("website_link")
    @classmethod
    def _http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("Please provide a valid URL")
        return value

    def find_image(self, image: str) -> ScholarshipImage | None:
        return next((img for img in self.images if img.matches(image)), None)
