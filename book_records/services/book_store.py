"""
Book Store Service

Repository over the books table. Each public method issues exactly one SQL
statement through the session it was constructed with, so the store can be
swapped for a test double or bound to any engine.

Error handling:
===============
- Zero matching rows on get/update/delete raises BookNotFoundError
- Any SQLAlchemyError is rolled back, logged and re-raised as StoreError
- Nothing is retried
"""

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from book_records.models import Book
from book_records.schemas import BookPayload

logger = logging.getLogger(__name__)


# =============================================================================
# Error classes
# =============================================================================


class BookNotFoundError(Exception):
    """Raised when no row matches the requested book id."""

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__("Book not found")


class StoreError(Exception):
    """Raised when the record store fails to execute a statement."""

    pass


def generate_book_id() -> str:
    """Return a fresh random UUID in its canonical text form."""
    return str(uuid.uuid4())


class BookStore:
    """
    Create/read/update/delete access to the books table.

    Usage:
        store = BookStore(db)
        book = store.create_book(BookPayload(title="Dune"))
        store.get_book(book.id)
    """

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, message: str, exc: SQLAlchemyError) -> StoreError:
        self.db.rollback()
        logger.error(f"{message}: {exc}")
        return StoreError(message)

    def list_books(self) -> Sequence[Book]:
        """
        Return every book in the store's natural order.

        Raises:
            StoreError: If the query fails
        """
        try:
            return self.db.execute(select(Book)).scalars().all()
        except SQLAlchemyError as exc:
            raise self._fail("Failed to fetch books", exc) from exc

    def get_book(self, book_id: str) -> Book:
        """
        Return the book with the given id.

        Raises:
            BookNotFoundError: If no row matches
            StoreError: If the query fails
        """
        try:
            book = self.db.execute(
                select(Book).where(Book.id == book_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise self._fail("Database error", exc) from exc

        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def create_book(self, payload: BookPayload) -> Book:
        """
        Insert a new book under a freshly generated id.

        The returned Book is built from the inserted values rather than read
        back, so creation costs a single INSERT.

        Args:
            payload: Book fields from the request body

        Returns:
            The stored book, including its generated id

        Raises:
            StoreError: If the insert fails
        """
        book = Book(
            id=generate_book_id(),
            title=payload.title,
            author=payload.author,
            published_year=payload.published_year,
            genre=payload.genre,
        )
        try:
            self.db.execute(
                insert(Book).values(
                    id=book.id,
                    title=book.title,
                    author=book.author,
                    published_year=book.published_year,
                    genre=book.genre,
                )
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("Failed to create the book", exc) from exc

        logger.info(f"Created book {book.id}")
        return book

    def update_book(self, book_id: str, payload: BookPayload) -> None:
        """
        Overwrite every field except the id.

        Raises:
            BookNotFoundError: If no row matches (nothing is changed)
            StoreError: If the update fails
        """
        stmt = (
            update(Book)
            .where(Book.id == book_id)
            .values(
                title=payload.title,
                author=payload.author,
                published_year=payload.published_year,
                genre=payload.genre,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("Failed to update the book", exc) from exc

        if result.rowcount == 0:
            raise BookNotFoundError(book_id)
        logger.info(f"Updated book {book_id}")

    def delete_book(self, book_id: str) -> None:
        """
        Hard-delete the book with the given id.

        Raises:
            BookNotFoundError: If no row matches
            StoreError: If the delete fails
        """
        stmt = (
            delete(Book)
            .where(Book.id == book_id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("Failed to delete the book", exc) from exc

        if result.rowcount == 0:
            raise BookNotFoundError(book_id)
        logger.info(f"Deleted book {book_id}")
