"""
pytest Fixtures for Book Records API Tests

This file contains shared fixtures used across all test files.

For database tests, we use:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# Rate limiting is disabled and the startup database check is skipped,
# because the tests never talk to the configured PostgreSQL server.
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CHECK_DATABASE_ON_STARTUP"] = "false"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from book_records.database import Base, get_db
from book_records.main import app
from book_records.models import Book

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory keeps the suite fast and self-contained. The books table
# only uses TEXT columns, so it behaves the same as on PostgreSQL.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the whole session.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is bound to a connection inside an outer transaction that is
    rolled back afterwards, so commits made by the code under test never
    leak into other tests.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    if transaction.is_active:
        transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# FAILURE DOUBLES
# =============================================================================
class FailingSession:
    """
    Stand-in for a Session whose database is unreachable.

    Every statement raises OperationalError, the way psycopg2 failures
    surface through SQLAlchemy.
    """

    def __init__(self):
        self.rolled_back = False

    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    def commit(self):
        pass

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


@pytest.fixture
def failing_session() -> FailingSession:
    """A session double that fails every statement."""
    return FailingSession()


@pytest.fixture
def failing_client(failing_session: FailingSession) -> Generator[TestClient, None, None]:
    """Test client whose record store cannot reach the database."""

    def override_get_db():
        yield failing_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Insert a sample book directly through the ORM."""
    book = Book(
        id="5f0c2a8e-8f3b-4c55-9a1e-2b7d9c4e6a10",
        title="Dune",
        author="Herbert",
        published_year="1965",
        genre="SF",
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    # Detached so later commits in the code under test do not expire it
    db_session.expunge(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """Insert several books for list tests."""
    books = []
    for i in range(5):
        book = Book(
            id=f"00000000-0000-4000-8000-00000000000{i}",
            title=f"Test Book {i + 1}",
            author=f"Author {i + 1}",
            published_year=str(1990 + i),
            genre="Fiction",
        )
        books.append(book)
        db_session.add(book)

    db_session.commit()
    for book in books:
        db_session.refresh(book)
        db_session.expunge(book)

    return books
