"""
Book Model

The only model of the Book Records API, mapping the existing `books` table.

Table layout:
    books(id, title, author, publishedyear, genre)

Every column is free-form text. The year column is named `publishedyear`
because PostgreSQL folds the unquoted identifier `publishedYear` to lower
case when the table is created; the Python attribute is `published_year`.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from book_records.database import Base


class Book(Base):
    """
    Book model representing one row of the books table.

    Fields:
    - id: Text primary key, a UUID generated by the service on creation
    - title, author, published_year, genre: free-form strings

    Example:
        book = Book(
            id="0b6e1b1c-4c57-4b8f-8a43-1c7f5d1f0d7e",
            title="Dune",
            author="Herbert",
            published_year="1965",
            genre="SF",
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    # Assigned by BookStore.create_book, never by the client or the database
    id: Mapped[str] = mapped_column(Text, primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str | None] = mapped_column(Text, nullable=True)

    author: Mapped[str | None] = mapped_column(Text, nullable=True)

    published_year: Mapped[str | None] = mapped_column(
        "publishedyear",
        Text,
        nullable=True,
    )

    genre: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"Book(id='{self.id}', title='{self.title}')"
