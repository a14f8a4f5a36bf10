"""
API Routers Package

Router Structure:
- books.py: /books endpoints
- auth.py: /auth endpoints (sign-up, sign-in, refresh, me)

Each router is imported and registered in main.py.
"""

from crud_app.routers.auth import router as auth_router
from crud_app.routers.books import router as books_router

__all__ = [
    "books_router",
    "auth_router",
]
