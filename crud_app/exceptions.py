"""
Domain Exceptions

Repositories and services raise these; routers translate them to HTTP
status codes. Store failures are not wrapped: they surface as
sqlalchemy.exc.SQLAlchemyError and map to 500.
"""


class CrudAppError(Exception):
    """Base class for all domain errors."""


class BookNotFoundError(CrudAppError):
    """Raised when a lookup by id matches no book."""

    def __init__(self, book_id: int) -> None:
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} not found")


class EmptyUpdateError(CrudAppError):
    """Raised when a partial update carries no fields to apply."""

    def __init__(self) -> None:
        super().__init__("Update must set at least one field")


class EmailAlreadyRegisteredError(CrudAppError):
    """Raised on sign-up with an email that already has an account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already registered")


class InvalidCredentialsError(CrudAppError):
    """Raised on sign-in with an unknown email or a wrong password."""

    def __init__(self) -> None:
        super().__init__("Incorrect email or password")


class InvalidRefreshTokenError(CrudAppError):
    """Raised when a refresh token is unknown or expired."""

    def __init__(self) -> None:
        super().__init__("Invalid or expired refresh token")
