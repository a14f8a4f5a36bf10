"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() manages their lifecycle.

Wiring:
    get_db (session per request)
      -> BooksRepository / UsersRepository
        -> BooksService / UsersService
          -> route handlers

Tests replace get_db through app.dependency_overrides, and everything
above it follows.
"""

import logging
import re
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, HTTPException, Path, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from crud_app.config import get_settings
from crud_app.database import get_db
from crud_app.models import UserRecord
from crud_app.repositories import BooksRepository, UsersRepository
from crud_app.services import BooksService, UsersService
from crud_app.services.security import decode_access_token

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_books(db: Session = Depends(get_db)):
#
# You can write:
#   def get_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Logger
# =============================================================================
def get_logger(request: Request) -> logging.Logger:
    """
    Return the logger built by the application factory.

    create_app() stores it on app.state; components receive child loggers
    of it instead of configuring logging themselves.
    """
    return getattr(request.app.state, "logger", None) or logging.getLogger("crud_app")


AppLogger = Annotated[logging.Logger, Depends(get_logger)]


# =============================================================================
# Services
# =============================================================================
def get_books_service(db: DbSession, logger: AppLogger) -> BooksService:
    repo = BooksRepository(db, logger.getChild("repositories.books"))
    return BooksService(repo, logger.getChild("services.books"))


def get_users_service(db: DbSession, logger: AppLogger) -> UsersService:
    repo = UsersRepository(db, logger.getChild("repositories.users"))
    return UsersService(
        repo,
        access_token_ttl=timedelta(minutes=settings.access_token_ttl_minutes),
        refresh_token_ttl=timedelta(days=settings.refresh_token_ttl_days),
        logger=logger.getChild("services.users"),
    )


BooksServiceDep = Annotated[BooksService, Depends(get_books_service)]
UsersServiceDep = Annotated[UsersService, Depends(get_users_service)]


# =============================================================================
# Path Parameters
# =============================================================================
# Ids are decimal integers that fit the store's 64-bit column
BOOK_ID_PATTERN = re.compile(r"[0-9]+")
MAX_BOOK_ID = 2**63 - 1


def parse_book_id(
    logger: AppLogger,
    book_id: str = Path(..., description="Book ID (positive integer)"),
) -> int:
    """
    Parse the {book_id} path segment.

    The segment is declared as a string so that "abc", "-5" and "0" reach
    this function and get a 400 instead of FastAPI's 422.

    Raises:
        HTTPException: 400 if the id is not a positive 64-bit integer
    """
    if BOOK_ID_PATTERN.fullmatch(book_id):
        value = int(book_id)
        if 0 < value <= MAX_BOOK_ID:
            return value

    logger.warning(
        f"Rejected book id {book_id!r}",
        extra={"problem": "invalid id"},
    )
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Invalid ID",
    )


BookId = Annotated[int, Depends(parse_book_id)]


# =============================================================================
# Bearer Authentication
# =============================================================================
# auto_error=False so a missing header yields our 401 instead of HTTPBearer's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    users: UsersServiceDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserRecord:
    """
    Resolve the user from the "Authorization: Bearer <token>" header.

    Raises:
        HTTPException: 401 if the token is missing, invalid, or its user is gone
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    user = users.get_by_id(user_id)
    if user is None:
        raise credentials_exception

    return user


CurrentUser = Annotated[UserRecord, Depends(get_current_user)]
