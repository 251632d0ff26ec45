from abc import ABC, abstractmethod

from pydantic import BaseModel

from studyhub.models.media import StorageReference


class StoredFile(BaseModel):
    id: str
    url: str
    stored_url: str = ""
    category: str
    filename: str
    backend: str

    def to_reference(self) -> StorageReference:
        return StorageReference(id=self.id, url=self.stored_url or self.url)


class StorageBackend(ABC):
    name: str = ""

    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        """Store data under key and return a URL clients can fetch it from."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the object. A missing object is not an error."""
        ...

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Rebuild the public URL for key from current configuration."""
        ...

    def reference_url(self, key: str, url: str) -> str:
        """The URL a record should keep for key; defaults to the URL save returned."""
        return url

    @abstractmethod
    def owns_url(self, url: str) -> bool:
        """Whether url was produced by this backend's addressing scheme."""
        ...
