#!/usr/bin/env python3
"""
Database Seed Script

Populates the books table with sample data for development.

USAGE:
    # From the project root with the package installed
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Creates the tables if they don't exist
3. Clears existing books (optional)
4. Inserts sample books through the books service
"""

from datetime import UTC, datetime

from sqlalchemy import delete
from sqlalchemy.orm import Session

from crud_app.database import SessionLocal, create_tables
from crud_app.logging_config import configure_logging
from crud_app.models import BookRecord
from crud_app.repositories import BooksRepository
from crud_app.schemas import BookCreate
from crud_app.services import BooksService

SAMPLE_BOOKS = [
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "publish_date": datetime(1965, 8, 1, tzinfo=UTC),
        "rating": 5,
    },
    {
        "title": "1984",
        "author": "George Orwell",
        "publish_date": datetime(1949, 6, 8, tzinfo=UTC),
        "rating": 5,
    },
    {
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "publish_date": datetime(1813, 1, 28, tzinfo=UTC),
        "rating": 4,
    },
    {
        "title": "Foundation",
        "author": "Isaac Asimov",
        "publish_date": datetime(1951, 6, 1, tzinfo=UTC),
        "rating": 4,
    },
    {
        # No publish date: the service stamps the current time
        "title": "Untitled Draft",
        "author": "Anonymous",
        "rating": 1,
    },
]


def clear_data(db: Session) -> None:
    """Clear all existing books."""
    print("Clearing existing books...")
    db.execute(delete(BookRecord))
    db.commit()
    print("Data cleared.")


def create_books(service: BooksService) -> list[int]:
    """Create sample books and return their ids."""
    print("Creating books...")
    book_ids = [service.create(BookCreate(**data)) for data in SAMPLE_BOOKS]
    print(f"Created {len(book_ids)} books.")
    return book_ids


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing books before seeding.
    """
    logger = configure_logging()

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        service = BooksService(BooksRepository(db, logger), logger)
        book_ids = create_books(service)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"  - Books: {len(book_ids)} (ids {book_ids[0]}..{book_ids[-1]})")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
