"""
Book Model

Table mapping for the books table. The repository issues its statements
against this mapping; nothing else in the service touches the table.

Columns:
- id: Server-assigned primary key (SERIAL on PostgreSQL)
- title: Book title (required)
- author: Author name (required)
- publish_date: Publication timestamp (the service fills in "now" if absent)
- rating: Integer rating
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from crud_app.database import Base


class BookRecord(Base):
    """
    Row of the books table.

    Named BookRecord to keep it apart from the Book response schema.

    Example:
        record = BookRecord(
            title="Dune",
            author="Frank Herbert",
            publish_date=datetime(1965, 8, 1),
            rating=5,
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Author name"
    )

    publish_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Publication date"
    )

    rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Book rating"
    )

    def __repr__(self) -> str:
        return f"BookRecord(id={self.id}, title='{self.title}', author='{self.author}')"
