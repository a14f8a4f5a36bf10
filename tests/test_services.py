"""
Tests for the service layer with in-memory fake repositories.
"""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt
from sqlalchemy.exc import OperationalError

from crud_app.exceptions import (
    BookNotFoundError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
)
from crud_app.models import RefreshSessionRecord, UserRecord
from crud_app.schemas import Book, BookCreate, BookUpdate, SignInInput, SignUpInput
from crud_app.services import BooksService, UsersService
from crud_app.services.security import decode_access_token, hash_password


class FakeBooksRepository:
    """Records calls and keeps books in a dict."""

    def __init__(self):
        self.books: dict[int, Book] = {}
        self.created: list[BookCreate] = []
        self.updates: list[tuple[int, BookUpdate]] = []

    def create(self, book: BookCreate) -> int:
        self.created.append(book)
        book_id = len(self.books) + 1
        self.books[book_id] = Book(id=book_id, **book.model_dump())
        return book_id

    def get_by_id(self, book_id: int) -> Book:
        try:
            return self.books[book_id]
        except KeyError:
            raise BookNotFoundError(book_id) from None

    def get_all(self) -> list[Book]:
        return [self.books[k] for k in sorted(self.books)]

    def delete(self, book_id: int) -> None:
        self.books.pop(book_id, None)

    def update(self, book_id: int, inp: BookUpdate) -> None:
        self.updates.append((book_id, inp))


class TestBooksService:
    def test_create_defaults_publish_date(self):
        repo = FakeBooksRepository()
        service = BooksService(repo)

        before = datetime.now(UTC)
        book_id = service.create(BookCreate(title="Dune", author="Herbert"))
        after = datetime.now(UTC)

        assert book_id == 1
        stored = repo.created[0].publish_date
        assert before <= stored <= after

    def test_create_keeps_supplied_publish_date(self):
        repo = FakeBooksRepository()
        published = datetime(1965, 8, 1, tzinfo=UTC)

        BooksService(repo).create(
            BookCreate(title="Dune", author="Herbert", publish_date=published)
        )

        assert repo.created[0].publish_date == published

    def test_create_does_not_mutate_input(self):
        book = BookCreate(title="Dune", author="Herbert")

        BooksService(FakeBooksRepository()).create(book)

        assert book.publish_date is None

    def test_get_by_id_propagates_not_found(self):
        with pytest.raises(BookNotFoundError):
            BooksService(FakeBooksRepository()).get_by_id(42)

    def test_update_forwards_unchanged(self):
        repo = FakeBooksRepository()
        inp = BookUpdate(rating=4)

        BooksService(repo).update(3, inp)

        assert repo.updates == [(3, inp)]

    def test_store_errors_propagate(self):
        repo = FakeBooksRepository()

        def broken(*args):
            raise OperationalError("SELECT", {}, Exception("down"))

        repo.get_all = broken

        with pytest.raises(OperationalError):
            BooksService(repo).get_all()


class FakeUsersRepository:
    def __init__(self):
        self.users: dict[int, UserRecord] = {}
        self.sessions: dict[str, RefreshSessionRecord] = {}

    def create(self, name: str, email: str, password_hash: str) -> UserRecord:
        user = UserRecord(id=len(self.users) + 1, name=name, email=email, password=password_hash)
        self.users[user.id] = user
        return user

    def get_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_by_id(self, user_id: int) -> UserRecord | None:
        return self.users.get(user_id)

    def create_refresh_session(self, user_id: int, token: str, expires_at: datetime) -> None:
        self.sessions[token] = RefreshSessionRecord(
            user_id=user_id, token=token, expires_at=expires_at
        )

    def pop_refresh_session(self, token: str) -> RefreshSessionRecord | None:
        return self.sessions.pop(token, None)


@pytest.fixture
def users_service() -> UsersService:
    return UsersService(
        FakeUsersRepository(),
        access_token_ttl=timedelta(minutes=5),
        refresh_token_ttl=timedelta(days=1),
    )


class TestUsersService:
    def test_sign_up_hashes_password(self, users_service):
        user = users_service.sign_up(
            SignUpInput(name="Jane", email="jane@example.com", password="SecurePass123")
        )

        assert user.password.startswith("$2")
        assert user.password != "SecurePass123"

    def test_sign_up_duplicate(self, users_service):
        inp = SignUpInput(name="Jane", email="jane@example.com", password="SecurePass123")
        users_service.sign_up(inp)

        with pytest.raises(EmailAlreadyRegisteredError):
            users_service.sign_up(inp)

    def test_sign_in_issues_tokens(self, users_service):
        user = users_service.repo.create("Jane", "jane@example.com", hash_password("SecurePass123"))

        tokens = users_service.sign_in(
            SignInInput(email="jane@example.com", password="SecurePass123")
        )

        assert tokens.expires_in == 300
        assert decode_access_token(tokens.access_token) == user.id
        assert tokens.refresh_token in users_service.repo.sessions

    def test_access_token_lifetime_comes_from_service(self, users_service):
        users_service.repo.create("Jane", "jane@example.com", hash_password("SecurePass123"))

        tokens = users_service.sign_in(
            SignInInput(email="jane@example.com", password="SecurePass123")
        )

        claims = jwt.get_unverified_claims(tokens.access_token)
        assert claims["exp"] - claims["iat"] == 300

    def test_sign_in_wrong_password(self, users_service):
        users_service.repo.create("Jane", "jane@example.com", hash_password("SecurePass123"))

        with pytest.raises(InvalidCredentialsError):
            users_service.sign_in(SignInInput(email="jane@example.com", password="nope"))

    def test_refresh_expired(self, users_service):
        users_service.repo.create_refresh_session(
            1, "old", datetime.now(UTC) - timedelta(seconds=1)
        )

        with pytest.raises(InvalidRefreshTokenError):
            users_service.refresh("old")

        # Revoked even though it was rejected
        assert "old" not in users_service.repo.sessions

    def test_refresh_accepts_naive_utc_expiry(self, users_service):
        naive_future = (datetime.now(UTC) + timedelta(hours=1)).replace(tzinfo=None)
        users_service.repo.create_refresh_session(1, "naive", naive_future)

        tokens = users_service.refresh("naive")

        assert tokens.refresh_token != "naive"
