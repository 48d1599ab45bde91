"""
Test Suite for Book Records API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_books.py: Tests for the /books endpoints
- test_book_store.py: Tests for the BookStore repository
- test_app.py: Health, startup, settings and rate limiter tests
- test_seed_data.py: Tests for the development seed script

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=book_records --cov-report=html

    # Run specific file
    pytest tests/test_books.py
"""
