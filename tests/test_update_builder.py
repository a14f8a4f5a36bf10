"""
Tests for the partial UPDATE statement builder.
"""

from datetime import UTC, datetime

import pytest

from crud_app.exceptions import EmptyUpdateError
from crud_app.repositories import Assignment, BookUpdateBuilder
from crud_app.schemas import BookUpdate


def _sql(stmt) -> str:
    return " ".join(str(stmt).split())


class TestFromInput:
    def test_single_field(self):
        builder = BookUpdateBuilder.from_input(BookUpdate(rating=4))

        assert builder.assignments == (Assignment("rating", "new_rating", 4),)

    def test_fixed_column_order(self):
        published = datetime(1965, 8, 1, tzinfo=UTC)
        # Keyword order differs from column order on purpose
        inp = BookUpdate(rating=5, publish_date=published, author="Herbert", title="Dune")

        builder = BookUpdateBuilder.from_input(inp)

        assert [a.column for a in builder.assignments] == [
            "title",
            "author",
            "publish_date",
            "rating",
        ]
        assert [a.placeholder for a in builder.assignments] == [
            "new_title",
            "new_author",
            "new_publish_date",
            "new_rating",
        ]

    def test_none_fields_are_skipped(self):
        builder = BookUpdateBuilder.from_input(BookUpdate(title="Dune", author=None))

        assert [a.column for a in builder.assignments] == ["title"]

    def test_zero_rating_is_an_assignment(self):
        builder = BookUpdateBuilder.from_input(BookUpdate(rating=0))

        assert not builder.is_empty()
        assert builder.assignments[0].value == 0

    def test_empty_input(self):
        builder = BookUpdateBuilder.from_input(BookUpdate())

        assert builder.is_empty()
        assert builder.assignments == ()


class TestSet:
    def test_unknown_column(self):
        with pytest.raises(ValueError, match="cannot be updated"):
            BookUpdateBuilder().set("id", 5)

    def test_duplicate_column(self):
        builder = BookUpdateBuilder().set("title", "Dune")

        with pytest.raises(ValueError, match="already assigned"):
            builder.set("title", "Dune Messiah")

    def test_chaining(self):
        builder = BookUpdateBuilder().set("title", "Dune").set("rating", 3)

        assert len(builder.assignments) == 2


class TestBuild:
    def test_empty_builder_raises(self):
        with pytest.raises(EmptyUpdateError):
            BookUpdateBuilder().build(book_id=1)

    def test_statement_text(self):
        stmt = BookUpdateBuilder().set("title", "Dune").set("rating", 4).build(book_id=7)

        sql = _sql(stmt)
        assert sql.startswith("UPDATE books SET")
        assert sql.index("title=:new_title") < sql.index("rating=:new_rating")
        assert sql.endswith("WHERE books.id = :book_id")
        assert "author" not in sql

    def test_statement_parameters(self):
        stmt = BookUpdateBuilder().set("author", "Herbert").build(book_id=7)

        params = stmt.compile().params
        assert params["new_author"] == "Herbert"
        assert params["book_id"] == 7
