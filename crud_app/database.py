"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the service.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Repository statements run on that session, each committed on its own
3. Close session when request ends

This is implemented using FastAPI's dependency injection (get_db).

Production runs on PostgreSQL through psycopg2; tests point DATABASE_URL
at SQLite, which needs a different pool configuration (see create_db_engine).
"""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from crud_app.config import get_settings

settings = get_settings()


def create_db_engine(url: URL | str, pool_size: int = 5, max_overflow: int = 10,
                     echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for a connection URL.

    Key parameters for server databases:
    - pool_size: Number of connections to keep open permanently
    - max_overflow: How many extra connections can be created during high load
    - pool_pre_ping: Test connection health before using

    SQLite does not take pool sizing arguments. An in-memory SQLite database
    lives only as long as its connection, so it gets a StaticPool that hands
    the same connection to every thread.
    """
    url = make_url(url)

    if url.get_backend_name() == "sqlite":
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )

    return create_engine(
        url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        echo=echo,
    )


# =============================================================================
# Database Engine and Session Factory
# =============================================================================
# create_engine() does not connect; the first connection is opened by the
# startup check in the application lifespan.

engine = create_db_engine(
    settings.sqlalchemy_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    echo=settings.debug,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Table mappings in crud_app.models inherit from this class, which
    registers them on Base.metadata for create_tables().
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, code after yield closes it.
    Closing a session with uncommitted work rolls that work back.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables(bind: Engine | None = None) -> None:
    """
    Create all missing tables.

    create_all() checks for each table first, so calling this on every
    startup is safe.
    """
    # Import models so their tables are registered on Base.metadata
    import crud_app.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind: Engine | None = None) -> None:
    """
    Drop all tables.

    DANGER: This deletes all data! Only use in development and tests.
    """
    import crud_app.models  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)


def check_connection(bind: Engine | None = None) -> None:
    """
    Run a trivial query to prove the database is reachable.

    Raises:
        sqlalchemy.exc.OperationalError: If the database cannot be reached
    """
    with (bind or engine).connect() as connection:
        connection.execute(text("SELECT 1"))
