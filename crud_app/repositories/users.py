"""
Users Repository

Account and refresh-session storage for the auth service.
"""

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from crud_app.exceptions import EmailAlreadyRegisteredError
from crud_app.models import RefreshSessionRecord, UserRecord


class UsersRepository:
    """Users and refresh_tokens table access on a SQLAlchemy session."""

    def __init__(self, db: Session, logger: logging.Logger | None = None) -> None:
        self.db = db
        self.logger = logger or logging.getLogger(__name__)

    def create(self, name: str, email: str, password_hash: str) -> UserRecord:
        """
        Insert a user.

        Raises:
            EmailAlreadyRegisteredError: If the unique email index rejects the row
        """
        user = UserRecord(name=name, email=email, password=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise EmailAlreadyRegisteredError(email) from exc

        self.db.refresh(user)
        return user

    def get_by_email(self, email: str) -> UserRecord | None:
        stmt = select(UserRecord).where(UserRecord.email == email)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_id(self, user_id: int) -> UserRecord | None:
        return self.db.get(UserRecord, user_id)

    def create_refresh_session(self, user_id: int, token: str, expires_at: datetime) -> None:
        self.db.add(RefreshSessionRecord(user_id=user_id, token=token, expires_at=expires_at))
        self.db.commit()

    def pop_refresh_session(self, token: str) -> RefreshSessionRecord | None:
        """
        Remove a refresh session and return it.

        Returns None if the token is unknown. The row is gone afterwards
        either way, so a token can be exchanged once.
        """
        stmt = select(RefreshSessionRecord).where(RefreshSessionRecord.token == token)
        session = self.db.execute(stmt).scalar_one_or_none()
        if session is None:
            return None

        # Detach first so commit() does not expire the loaded attributes
        self.db.expunge(session)
        self.db.execute(
            delete(RefreshSessionRecord).where(RefreshSessionRecord.id == session.id)
        )
        self.db.commit()
        return session
