"""
Authentication Router

Handles user authentication endpoints:
- Sign-up (name/email/password)
- Sign-in (email/password -> access JWT + refresh token)
- Token refresh (refresh token -> new token pair, old one revoked)
- Current user (from the access token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Access tokens are short-lived JWTs
- Refresh tokens are stored server-side and work once
"""

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from crud_app.dependencies import AppLogger, CurrentUser, UsersServiceDep
from crud_app.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
)
from crud_app.schemas import (
    RefreshTokenInput,
    SignInInput,
    SignUpInput,
    TokenPair,
    User,
)
from crud_app.utils import store_failure

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
    },
)


@router.post(
    "/sign-up",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={409: {"description": "Email already registered"}},
)
def sign_up(
    user_data: SignUpInput,
    users: UsersServiceDep,
    logger: AppLogger,
) -> User:
    """Create a new account. The response never includes the password."""
    try:
        user = users.sign_up(user_data)
    except EmailAlreadyRegisteredError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except SQLAlchemyError as exc:
        raise store_failure(logger, "sign_up", "inserting user", exc) from exc

    return User.model_validate(user)


@router.post(
    "/sign-in",
    response_model=TokenPair,
    summary="Sign in with email and password",
    description="""
    Authenticate with email and password.

    Include the access token in the Authorization header:
    ```
    Authorization: Bearer <access_token>
    ```
    Use the refresh token with `/auth/refresh` when the access token expires.
    """,
)
def sign_in(
    credentials: SignInInput,
    users: UsersServiceDep,
    logger: AppLogger,
) -> TokenPair:
    """Check credentials and issue a token pair."""
    try:
        return users.sign_in(credentials)
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except SQLAlchemyError as exc:
        raise store_failure(logger, "sign_in", "issuing tokens", exc) from exc


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh tokens",
    description="Exchange a refresh token for a new token pair. The old refresh token stops working.",
)
def refresh(
    body: RefreshTokenInput,
    users: UsersServiceDep,
    logger: AppLogger,
) -> TokenPair:
    """Rotate a refresh token."""
    try:
        return users.refresh(body.refresh_token)
    except InvalidRefreshTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except SQLAlchemyError as exc:
        raise store_failure(logger, "refresh", "rotating refresh token", exc) from exc


@router.get(
    "/me",
    response_model=User,
    summary="Get current user",
)
def get_me(current_user: CurrentUser) -> User:
    """Return the user the access token was issued to."""
    return User.model_validate(current_user)
