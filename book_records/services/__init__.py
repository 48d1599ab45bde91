"""
Services Package

Logic kept apart from HTTP handling so it can be tested in isolation.

Current services:
- book_store.py: BookStore repository and its error classes
- rate_limiter.py: Rate limiting with slowapi
"""

from book_records.services.book_store import (
    BookNotFoundError,
    BookStore,
    StoreError,
)

__all__ = [
    "BookNotFoundError",
    "BookStore",
    "StoreError",
]
