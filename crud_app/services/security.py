"""
Security Service

Handles password hashing and token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib); each hash carries its own salt
2. JWT access tokens signed with SECRET_KEY (python-jose)
3. Opaque random refresh tokens, stored server-side by the auth service

Usage:
    from crud_app.services.security import hash_password, verify_password

    hashed = hash_password("SecurePass123")
    is_valid = verify_password("SecurePass123", hashed)
"""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from crud_app.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# deprecated="auto" means old hashes are upgraded on next verification
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("SecurePass123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"
REFRESH_TOKEN_BYTES = 32


def create_access_token(user_id: int, expires_delta: timedelta) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user_id: Stored as the "sub" claim (as a string, per RFC 7519)
        expires_delta: Token lifetime (the users service passes ACCESS_TOKEN_TTL_MINUTES)

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(UTC)
    to_encode = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
        "type": "access",
    }

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> int | None:
    """
    Decode an access token and return the user id.

    Returns:
        User id if the token is valid, unexpired and an access token;
        None otherwise
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None

    if payload.get("type") != "access":
        logger.warning("Token type mismatch: expected access")
        return None

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Access token carries no usable subject")
        return None


def generate_refresh_token() -> str:
    """Generate an opaque, URL-safe refresh token."""
    return secrets.token_urlsafe(REFRESH_TOKEN_BYTES)
