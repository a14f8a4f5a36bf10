"""
pytest Fixtures for crud-app Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)

Every test runs inside a transaction that is rolled back afterwards, so
the commits issued by the repositories never outlive the test.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# Settings are cached on first access, and the module-level engine used by
# the lifespan startup check is built from DATABASE_URL.
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "unit-tests-signing-key-0123456789abcdef"
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"

from collections.abc import Generator
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import crud_app.models  # noqa: F401
from crud_app.database import Base, get_db
from crud_app.main import app
from crud_app.models import BookRecord, UserRecord
from crud_app.services.security import hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory keeps the suite free of external services.
# Timestamps come back naive from SQLite; tests compare them accordingly.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the whole session.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is bound to a connection with an open transaction.
    Repository commits stay inside that transaction, which is rolled back
    when the test ends.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    get_db is overridden, so every repository in the request chain uses
    the test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_book(db_session: Session) -> BookRecord:
    """Create a sample book for testing."""
    book = BookRecord(
        title="1984",
        author="George Orwell",
        publish_date=datetime(1949, 6, 8, tzinfo=UTC),
        rating=5,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[BookRecord]:
    """Create a handful of books for listing tests."""
    books = [
        BookRecord(
            title=f"Test Book {i + 1}",
            author=f"Author {i + 1}",
            publish_date=datetime(2000 + i, 1, 1, tzinfo=UTC),
            rating=i,
        )
        for i in range(5)
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


@pytest.fixture
def sample_user(db_session: Session) -> UserRecord:
    """Create a sample user for testing."""
    user = UserRecord(
        name="Test User",
        email="testuser@example.com",
        password=hash_password("SecurePass123"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_tokens(client: TestClient, sample_user: UserRecord) -> dict:
    """Sign in as sample_user and return the token pair."""
    response = client.post(
        "/auth/sign-in",
        json={"email": "testuser@example.com", "password": "SecurePass123"},
    )
    assert response.status_code == 200
    return response.json()
