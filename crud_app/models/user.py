"""
User Models

Tables backing sign-up/sign-in:
- users: registered accounts with a bcrypt password hash
- refresh_tokens: refresh sessions issued at sign-in, one row per token
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from crud_app.database import Base


class UserRecord(Base):
    """
    Registered user.

    Indexes:
    - Primary key on id (automatic)
    - email: Unique index for sign-in lookups
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Email address (used for sign-in)"
    )

    # Bcrypt hashes embed their own salt
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt password hash"
    )

    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the user signed up"
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation."""
        return f"UserRecord(id={self.id}, email='{self.email}')"


class RefreshSessionRecord(Base):
    """
    Refresh token issued to a user.

    A token is deleted when it is exchanged, so each one works once.
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    token: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"RefreshSessionRecord(id={self.id}, user_id={self.user_id})"
