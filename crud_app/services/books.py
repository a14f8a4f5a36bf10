"""
Books Service

Business rules for books. There is exactly one beyond forwarding: a book
created without a publish date is stamped with the current time.
Repository errors propagate unchanged.
"""

import logging
from datetime import UTC, datetime
from typing import Protocol

from crud_app.schemas import Book, BookCreate, BookUpdate


class BooksRepositoryProtocol(Protocol):
    """Storage operations the service needs."""

    def create(self, book: BookCreate) -> int: ...

    def get_by_id(self, book_id: int) -> Book: ...

    def get_all(self) -> list[Book]: ...

    def delete(self, book_id: int) -> None: ...

    def update(self, book_id: int, inp: BookUpdate) -> None: ...


class BooksService:
    """Thin layer between the HTTP handlers and the books repository."""

    def __init__(
        self,
        repo: BooksRepositoryProtocol,
        logger: logging.Logger | None = None,
    ) -> None:
        self.repo = repo
        self.logger = logger or logging.getLogger(__name__)

    def create(self, book: BookCreate) -> int:
        """Create a book, defaulting publish_date to now. Returns the new id."""
        if book.publish_date is None:
            book = book.model_copy(update={"publish_date": datetime.now(UTC)})

        book_id = self.repo.create(book)
        self.logger.info(f"Created book {book_id}: {book.title!r}")
        return book_id

    def get_by_id(self, book_id: int) -> Book:
        return self.repo.get_by_id(book_id)

    def get_all(self) -> list[Book]:
        return self.repo.get_all()

    def delete(self, book_id: int) -> None:
        self.repo.delete(book_id)

    def update(self, book_id: int, inp: BookUpdate) -> None:
        self.repo.update(book_id, inp)
