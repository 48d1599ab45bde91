#!/usr/bin/env python3
"""
Database Seed Script

Populates the books table with sample records for local development.

USAGE:
    # From the project root with the venv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Creates the books table if it does not exist
3. Clears existing rows (optional)
4. Inserts sample books through BookStore, so each gets a generated id
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from book_records.database import SessionLocal, create_tables
from book_records.models import Book
from book_records.schemas import BookPayload
from book_records.services.book_store import BookStore

SAMPLE_BOOKS = [
    {"title": "Dune", "author": "Frank Herbert", "publishedYear": "1965", "genre": "Science Fiction"},
    {"title": "1984", "author": "George Orwell", "publishedYear": "1949", "genre": "Dystopian"},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "publishedYear": "1813", "genre": "Romance"},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "publishedYear": "1937", "genre": "Fantasy"},
    {"title": "Murder on the Orient Express", "author": "Agatha Christie", "publishedYear": "1934", "genre": "Mystery"},
    {"title": "I, Robot", "author": "Isaac Asimov", "publishedYear": "1950", "genre": "Science Fiction"},
]


def clear_data(db: Session) -> None:
    """Delete every row from the books table."""
    print("Clearing existing data...")
    db.execute(delete(Book))
    db.commit()
    print("Data cleared.")


def create_books(db: Session) -> list[Book]:
    """Insert the sample books and return them with their generated ids."""
    print("Creating books...")
    store = BookStore(db)
    books = [
        store.create_book(BookPayload.model_validate(data))
        for data in SAMPLE_BOOKS
    ]
    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        books = create_books(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"\nBooks: {len(books)}")
        print("\nYou can now access the API at http://localhost:8080/books")
        print("API documentation at http://localhost:8080/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
