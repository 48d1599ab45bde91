"""
SQLAlchemy Models Package

This package contains the database models for the Book Records API.
Models are SQLAlchemy ORM classes that map to database tables.

Importing the models here registers them with Base.metadata, so
create_tables() and the test fixtures see every table.
"""

from book_records.models.book import Book

__all__ = [
    "Book",
]
