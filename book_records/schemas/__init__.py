"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Control exactly what data is exposed in API responses
2. The JSON field names (publishedYear) differ from the column names
3. Schemas generate the OpenAPI documentation

Schema Naming Convention:
- XxxBase: Shared fields
- XxxPayload: Request body for create and update
- XxxResponse: Fields returned in API responses
"""

from book_records.schemas.book import (
    BookBase,
    BookPayload,
    BookResponse,
    MessageResponse,
)

__all__ = [
    "BookBase",
    "BookPayload",
    "BookResponse",
    "MessageResponse",
]
