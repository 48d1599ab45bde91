"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Book Records API.

We use SYNCHRONOUS SQLAlchemy with psycopg2:
- FastAPI runs sync endpoints in its threadpool, one request per thread
- The engine's connection pool is shared by all of those threads
- Thread-safety of concurrent access is left to the pool and the driver

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. The handler issues one statement through that session
3. Close session when request ends

This is implemented using FastAPI's dependency injection.
"""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from book_records.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Key parameters:
# - pool_size: Number of connections to keep open permanently
# - max_overflow: How many extra connections can be created during high load
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements in debug mode

engine = create_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
    echo=settings.debug,
)


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

        class Book(Base):
            __tablename__ = "books"
            ...
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the route handler uses it, and the
    finally block closes it even if the handler raised.

    Tests replace this dependency through app.dependency_overrides[get_db].

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def check_database_connection(bind: Engine | None = None) -> None:
    """
    Verify the record store is reachable by running SELECT 1.

    Called from the application lifespan before any traffic is served.
    Errors propagate to the caller unchanged.

    Args:
        bind: Engine to check (defaults to the application engine)
    """
    bind = bind or engine
    with bind.connect() as connection:
        connection.execute(text("SELECT 1"))
    logger.info("Database connection established")


def create_tables() -> None:
    """
    Create all database tables.

    Useful for local development and the seed script. There is no migration
    tooling; production tables are expected to exist already.
    """
    Base.metadata.create_all(bind=engine)

