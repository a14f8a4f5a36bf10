"""
Pydantic Schemas Package

Request/response validation models, kept separate from the SQLAlchemy
table mappings so the API shape and the table can evolve independently.

Schema Naming Convention:
- XxxCreate: Fields required when creating a record
- XxxUpdate: Fields allowed when updating (all optional)
- Xxx: Fields returned in API responses
- XxxInput: Bodies of auth requests
"""

from crud_app.schemas.book import (
    Book,
    BookBase,
    BookCreate,
    BookUpdate,
)
from crud_app.schemas.user import (
    RefreshTokenInput,
    SignInInput,
    SignUpInput,
    TokenPair,
    User,
)

__all__ = [
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "Book",
    # User schemas
    "SignUpInput",
    "SignInInput",
    "RefreshTokenInput",
    "User",
    "TokenPair",
]
