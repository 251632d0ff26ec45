from __future__ import annotations

import logging

from studyhub.models.book import Book
from studyhub.models.media import MediaKind, MediaUpload
from studyhub.repositories.base import BookRepository
from studyhub.services.errors import InvalidMediaError, NotAuthorizedError, RecordNotFoundError
from studyhub.services.media import MediaLifecycle

logger = logging.getLogger(__name__)

PDF_CATEGORY = "library"
THUMBNAIL_CATEGORY = "library-thumbnails"
EDITABLE_FIELDS = ("title", "author", "description")


class BookService:
    def __init__(self, book_repo: BookRepository, media: MediaLifecycle) -> None:
        self.book_repo = book_repo
        self.media = media

    def _get_owned(self, uuid: str, user_id: int) -> Book:
        book = self.book_repo.get_by_uuid(uuid)
        if book is None:
            raise RecordNotFoundError("Book not found")
        if book.created_by != user_id:
            raise NotAuthorizedError("Not authorized to modify this book")
        return book

    def create_book(
        self,
        user_id: int,
        title: str,
        pdf: MediaUpload | None,
        author: str = "",
        description: str = "",
        thumbnail: MediaUpload | None = None,
    ) -> Book:
        if not title:
            raise ValueError("Book title is required")
        if pdf is None:
            raise InvalidMediaError("PDF file is required")

        with (
            self.media.staged(pdf, PDF_CATEGORY, MediaKind.PDF) as pdf_ref,
            self.media.staged(thumbnail, THUMBNAIL_CATEGORY, MediaKind.IMAGE) as thumbnail_ref,
        ):
            book = self.book_repo.create(
                Book(
                    title=title,
                    author=author,
                    description=description,
                    pdf=pdf_ref,
                    thumbnail=thumbnail_ref,
                    created_by=user_id,
                )
            )
        logger.info("Book created: uuid=%s title=%s", book.uuid, title)
        return book

    def get_book(self, uuid: str) -> Book:
        book = self.book_repo.get_by_uuid(uuid)
        if book is None:
            raise RecordNotFoundError("Book not found")
        return book

    def list_books(self) -> list[Book]:
        return self.book_repo.list_all()

    def update_book(
        self,
        uuid: str,
        user_id: int,
        pdf: MediaUpload | None = None,
        thumbnail: MediaUpload | None = None,
        **fields: str | None,
    ) -> Book:
        """Replace either file or both; old files go only after every new one is persisted."""
        book = self._get_owned(uuid, user_id)
        changes: dict = {name: value for name, value in fields.items() if name in EDITABLE_FIELDS and value is not None}
        if changes.get("title") == "":
            raise ValueError("Book title cannot be empty")

        replaced = []
        with (
            self.media.staged(pdf, PDF_CATEGORY, MediaKind.PDF) as pdf_ref,
            self.media.staged(thumbnail, THUMBNAIL_CATEGORY, MediaKind.IMAGE) as thumbnail_ref,
        ):
            if pdf_ref is not None:
                changes["pdf"] = pdf_ref
                replaced.append(book.pdf)
            if thumbnail_ref is not None:
                changes["thumbnail"] = thumbnail_ref
                replaced.append(book.thumbnail)
            updated = self.book_repo.update(book.model_copy(update=changes))

        self.media.discard(*replaced)
        logger.info("Book updated: uuid=%s fields=%s", uuid, sorted(changes))
        return updated

    def delete_book(self, uuid: str, user_id: int) -> None:
        book = self._get_owned(uuid, user_id)
        self.book_repo.delete(book.id)
        self.media.discard(book.pdf, book.thumbnail)
        logger.info("Book deleted: uuid=%s", uuid)
