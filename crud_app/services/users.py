"""
Users Service

Sign-up, sign-in and refresh-token rotation.

Flow:
1. sign_up: hash the password with bcrypt, store the user
2. sign_in: verify credentials, issue an access JWT and a stored refresh token
3. refresh: exchange a refresh token (single use) for a new token pair
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Protocol

from crud_app.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
)
from crud_app.models import RefreshSessionRecord, UserRecord
from crud_app.schemas import SignInInput, SignUpInput, TokenPair
from crud_app.services.security import (
    create_access_token,
    generate_refresh_token,
    hash_password,
    verify_password,
)


class UsersRepositoryProtocol(Protocol):
    """Storage operations the service needs."""

    def create(self, name: str, email: str, password_hash: str) -> UserRecord: ...

    def get_by_email(self, email: str) -> UserRecord | None: ...

    def get_by_id(self, user_id: int) -> UserRecord | None: ...

    def create_refresh_session(self, user_id: int, token: str, expires_at: datetime) -> None: ...

    def pop_refresh_session(self, token: str) -> RefreshSessionRecord | None: ...


class UsersService:
    """Account management on top of the users repository."""

    def __init__(
        self,
        repo: UsersRepositoryProtocol,
        access_token_ttl: timedelta,
        refresh_token_ttl: timedelta,
        logger: logging.Logger | None = None,
    ) -> None:
        self.repo = repo
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl
        self.logger = logger or logging.getLogger(__name__)

    def sign_up(self, inp: SignUpInput) -> UserRecord:
        """
        Register a user.

        Raises:
            EmailAlreadyRegisteredError: If the email already has an account
        """
        if self.repo.get_by_email(inp.email) is not None:
            raise EmailAlreadyRegisteredError(inp.email)

        user = self.repo.create(inp.name, inp.email, hash_password(inp.password))
        self.logger.info(f"New user registered: {user.email}")
        return user

    def sign_in(self, inp: SignInInput) -> TokenPair:
        """
        Check credentials and issue tokens.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        user = self.repo.get_by_email(inp.email)

        if user is None:
            self.logger.warning(f"Sign-in failed: user not found for {inp.email}")
            raise InvalidCredentialsError()

        if not verify_password(inp.password, user.password):
            self.logger.warning(f"Sign-in failed: incorrect password for {inp.email}")
            raise InvalidCredentialsError()

        self.logger.info(f"User signed in: {user.email}")
        return self._issue_tokens(user.id)

    def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new token pair.

        The presented token is revoked whether or not it was still valid.

        Raises:
            InvalidRefreshTokenError: Unknown or expired token
        """
        session = self.repo.pop_refresh_session(refresh_token)
        if session is None:
            raise InvalidRefreshTokenError()

        expires_at = session.expires_at
        # SQLite drops tzinfo; stored values are UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)

        if expires_at <= datetime.now(UTC):
            self.logger.warning(f"Expired refresh token used by user {session.user_id}")
            raise InvalidRefreshTokenError()

        return self._issue_tokens(session.user_id)

    def get_by_id(self, user_id: int) -> UserRecord | None:
        return self.repo.get_by_id(user_id)

    def _issue_tokens(self, user_id: int) -> TokenPair:
        refresh_token = generate_refresh_token()
        self.repo.create_refresh_session(
            user_id,
            refresh_token,
            datetime.now(UTC) + self.refresh_token_ttl,
        )

        return TokenPair(
            access_token=create_access_token(user_id, self.access_token_ttl),
            refresh_token=refresh_token,
            expires_in=int(self.access_token_ttl.total_seconds()),
        )
