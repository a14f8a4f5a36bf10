"""
Books Repository

Parameterized SQL against the books table. Every method runs a single
statement and commits it on its own; no operation spans a transaction.

Store failures are not caught here: they propagate as SQLAlchemyError and
the HTTP layer maps them to 500.
"""

import logging

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from crud_app.exceptions import BookNotFoundError
from crud_app.models import BookRecord
from crud_app.repositories.update_builder import BookUpdateBuilder
from crud_app.schemas import Book, BookCreate, BookUpdate

books = BookRecord.__table__


class BooksRepository:
    """
    Books table access on a SQLAlchemy session.

    Usage:
        repo = BooksRepository(db)
        book_id = repo.create(BookCreate(title="Dune", author="Herbert"))
        book = repo.get_by_id(book_id)
    """

    def __init__(self, db: Session, logger: logging.Logger | None = None) -> None:
        self.db = db
        self.logger = logger or logging.getLogger(__name__)

    def create(self, book: BookCreate) -> int:
        """
        Insert a book and return the id assigned by the store.

        The id is never taken from the caller.
        """
        stmt = insert(books).values(
            title=book.title,
            author=book.author,
            publish_date=book.publish_date,
            rating=book.rating,
        )
        result = self.db.execute(stmt)
        book_id = result.inserted_primary_key[0]
        self.db.commit()

        self.logger.debug("Inserted book id=%s", book_id)
        return book_id

    def get_by_id(self, book_id: int) -> Book:
        """
        Fetch one book.

        Raises:
            BookNotFoundError: If no row has this id
        """
        stmt = select(books).where(books.c.id == book_id)
        row = self.db.execute(stmt).mappings().one_or_none()

        if row is None:
            raise BookNotFoundError(book_id)

        return Book.model_validate(dict(row))

    def get_all(self) -> list[Book]:
        """Fetch every book, ordered by id."""
        stmt = select(books).order_by(books.c.id)
        rows = self.db.execute(stmt).mappings().all()
        return [Book.model_validate(dict(row)) for row in rows]

    def delete(self, book_id: int) -> None:
        """
        Delete a book.

        Deleting an id that does not exist is not an error.
        """
        result = self.db.execute(delete(books).where(books.c.id == book_id))
        self.db.commit()

        self.logger.debug("Deleted book id=%s (rows=%s)", book_id, result.rowcount)

    def update(self, book_id: int, inp: BookUpdate) -> None:
        """
        Apply a partial update.

        Only fields present in ``inp`` are written. Updating an id that does
        not exist changes nothing and is not an error.

        Raises:
            EmptyUpdateError: If ``inp`` carries no fields
        """
        stmt = BookUpdateBuilder.from_input(inp).build(book_id)
        result = self.db.execute(stmt)
        self.db.commit()

        self.logger.debug("Updated book id=%s (rows=%s)", book_id, result.rowcount)

    def create_table(self) -> None:
        """Create the books table if it does not exist."""
        books.create(bind=self.db.get_bind(), checkfirst=True)
