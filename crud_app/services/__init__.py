"""
Services Package

Business logic kept apart from HTTP handling (routers) and SQL
(repositories), so each layer can be tested in isolation.

Current services:
- books.py: book CRUD with the publish-date default
- users.py: sign-up, sign-in and refresh-token rotation
- security.py: password hashing and token utilities
"""

from crud_app.services.books import BooksRepositoryProtocol, BooksService
from crud_app.services.users import UsersRepositoryProtocol, UsersService

__all__ = [
    "BooksRepositoryProtocol",
    "BooksService",
    "UsersRepositoryProtocol",
    "UsersService",
]
