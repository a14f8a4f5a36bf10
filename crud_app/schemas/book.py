"""
Book Pydantic Schemas

- BookCreate: body of POST /books (no id; an id sent by the client is ignored)
- BookUpdate: body of PUT /books/{id}, every field optional
- Book: what the API returns
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


# The books.rating column is a 32-bit INTEGER
RATING_MIN = -(2**31)
RATING_MAX = 2**31 - 1


def _require_text(v: str, field: str) -> str:
    if not v.strip():
        raise ValueError(f"{field} cannot be empty or whitespace")
    return v.strip()


class BookBase(BaseModel):
    """
    Base schema with shared book fields.

    title and author are required and must contain non-whitespace text.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Book title",
        examples=["Dune"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        examples=["Frank Herbert"],
    )

    publish_date: datetime | None = Field(
        default=None,
        description="Publication date; defaults to the creation time",
        examples=["1965-08-01T00:00:00Z"],
    )

    rating: int = Field(
        default=0,
        ge=RATING_MIN,
        le=RATING_MAX,
        description="Book rating",
        examples=[5],
    )

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        return _require_text(v, "Title")

    @field_validator("author")
    @classmethod
    def author_must_not_be_empty(cls, v: str) -> str:
        return _require_text(v, "Author")


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "rating": 5
    }
    """


class BookUpdate(BaseModel):
    """
    Schema for a partial update (UpdateBookInput).

    Every field is optional. Fields that are absent or null leave the stored
    column untouched; see crud_app.repositories.update_builder.
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Book title",
    )

    author: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Author name",
    )

    publish_date: datetime | None = Field(
        default=None,
        description="Publication date",
    )

    rating: int | None = Field(
        default=None,
        ge=RATING_MIN,
        le=RATING_MAX,
        description="Book rating",
    )

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str | None) -> str | None:
        """Validate title if provided."""
        return _require_text(v, "Title") if v is not None else v

    @field_validator("author")
    @classmethod
    def author_must_not_be_empty(cls, v: str | None) -> str | None:
        """Validate author if provided."""
        return _require_text(v, "Author") if v is not None else v


class Book(BookBase):
    """Schema for book responses."""

    id: int = Field(..., description="Unique identifier")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Dune",
                "author": "Frank Herbert",
                "publish_date": "1965-08-01T00:00:00Z",
                "rating": 5,
            }
        },
    )
