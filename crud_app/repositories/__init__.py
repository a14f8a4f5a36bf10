"""
Repositories Package

SQL access for the service layer:
- books.py: CRUD statements on the books table
- update_builder.py: dynamic UPDATE construction for partial book updates
- users.py: users and refresh sessions
"""

from crud_app.repositories.books import BooksRepository
from crud_app.repositories.update_builder import Assignment, BookUpdateBuilder
from crud_app.repositories.users import UsersRepository

__all__ = [
    "Assignment",
    "BookUpdateBuilder",
    "BooksRepository",
    "UsersRepository",
]
