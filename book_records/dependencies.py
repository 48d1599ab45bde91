"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

The store handle is never a module-level global: each request gets a
BookStore wrapping its own session, and tests can replace either
get_db or get_book_store through app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from book_records.database import get_db
from book_records.services.book_store import BookStore

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_book(db: Session = Depends(get_db)):
#
# You can write:
#   def get_book(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


def get_book_store(db: DbSession) -> BookStore:
    """Build the record store for the current request's session."""
    return BookStore(db)


BookStoreDep = Annotated[BookStore, Depends(get_book_store)]
