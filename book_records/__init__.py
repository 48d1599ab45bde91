"""
Book Records API Application Package

A small HTTP service for create/read/update/delete operations over the
`books` table. Every endpoint maps to exactly one SQL statement.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection aliases
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Record store repository and rate limiting
"""

__version__ = "1.0.0"
