"""
SQLAlchemy Models Package

Table mappings for the service. Importing this package registers every
table on Base.metadata, which create_tables() relies on.
"""

from crud_app.models.book import BookRecord
from crud_app.models.user import RefreshSessionRecord, UserRecord

__all__ = [
    "BookRecord",
    "UserRecord",
    "RefreshSessionRecord",
]
