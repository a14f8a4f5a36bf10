"""
Partial-update statement builder for the books table.

A BookUpdate payload has every field optional. The builder walks the
fields in a fixed order (title, author, publish_date, rating), records a
(column, placeholder, value) assignment for every field that is present,
and renders an UPDATE whose WHERE clause on id comes last:

    builder = BookUpdateBuilder.from_input(BookUpdate(rating=4))
    stmt = builder.build(book_id=7)
    # UPDATE books SET rating=:new_rating WHERE books.id = :book_id

An UPDATE with an empty SET list is not valid SQL, so build() raises
EmptyUpdateError when nothing was assigned.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Update, bindparam, update

from crud_app.exceptions import EmptyUpdateError
from crud_app.models import BookRecord
from crud_app.schemas import BookUpdate

# Order in which present fields appear in the SET clause
UPDATABLE_COLUMNS = ("title", "author", "publish_date", "rating")


@dataclass(frozen=True)
class Assignment:
    """One ``column = :placeholder`` entry of the SET clause."""

    column: str
    placeholder: str
    value: Any


class BookUpdateBuilder:
    """Accumulates column assignments and renders the UPDATE statement."""

    def __init__(self) -> None:
        self._assignments: list[Assignment] = []

    @classmethod
    def from_input(cls, inp: BookUpdate) -> "BookUpdateBuilder":
        """
        Create a builder from a partial update payload.

        Fields that are None (absent from the request, or sent as null) are
        skipped and leave their column untouched.
        """
        builder = cls()
        for column in UPDATABLE_COLUMNS:
            value = getattr(inp, column)
            if value is not None:
                builder.set(column, value)
        return builder

    def set(self, column: str, value: Any) -> "BookUpdateBuilder":
        """
        Add an assignment.

        Raises:
            ValueError: If the column is not updatable or is already assigned
        """
        if column not in UPDATABLE_COLUMNS:
            raise ValueError(f"Column {column!r} cannot be updated")
        if any(a.column == column for a in self._assignments):
            raise ValueError(f"Column {column!r} is already assigned")

        self._assignments.append(Assignment(column, f"new_{column}", value))
        return self

    @property
    def assignments(self) -> tuple[Assignment, ...]:
        return tuple(self._assignments)

    def is_empty(self) -> bool:
        return not self._assignments

    def build(self, book_id: int) -> Update:
        """
        Render the UPDATE statement for one book.

        Raises:
            EmptyUpdateError: If no field was assigned
        """
        if self.is_empty():
            raise EmptyUpdateError()

        table = BookRecord.__table__
        values = {
            a.column: bindparam(a.placeholder, a.value, type_=table.c[a.column].type)
            for a in self._assignments
        }

        return (
            update(table)
            .values(values)
            .where(table.c.id == bindparam("book_id", book_id))
        )
