"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests import the module-level instance and override its dependencies

2. Lifespan Events
   - startup: verify the record store is reachable; failure halts the process
   - shutdown: dispose the engine's connection pool

3. Exception Handlers
   - Malformed request bodies become 400
   - Missing books become 404
   - Record store failures become 500
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from book_records.config import get_settings
from book_records.database import check_database_connection, engine
from book_records.dependencies import DbSession
from book_records.routers import books_router
from book_records.services.book_store import BookNotFoundError, StoreError
from book_records.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    An unreachable database on startup is logged and re-raised, which makes
    uvicorn exit before accepting any request.
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")

    if settings.check_database_on_startup:
        try:
            check_database_connection()
        except SQLAlchemyError as exc:
            logger.critical(f"Error connecting to the database: {exc}")
            raise

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Records API

Create, read, update and delete book records stored in a single table.

Every endpoint issues exactly one SQL statement. Ids are UUIDs generated
by the service.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        # /books/ and /books/create/ are 404s, not redirects
        redirect_slashes=False,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    # SlowAPIMiddleware applies the limiter's default limit to every route
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Report undecodable or mistyped request bodies as 400.

        Covers invalid JSON, a missing body, a body that is not an object,
        and book fields that are not strings.
        """
        logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid JSON body"},
        )

    @app.exception_handler(BookNotFoundError)
    async def book_not_found_exception_handler(
        request: Request,
        exc: BookNotFoundError,
    ) -> JSONResponse:
        """Zero rows matched the requested id."""
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Book not found"},
        )

    @app.exception_handler(StoreError)
    async def store_exception_handler(
        request: Request,
        exc: StoreError,
    ) -> JSONResponse:
        """
        Handle record store failures.

        BookStore has already logged the underlying database error; the
        client only sees the operation-level message.
        """
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and the database is reachable.",
    )
    def health_check(db: DbSession) -> JSONResponse:
        """
        Health check endpoint.

        Used by load balancers and container health checks. Returns 503 when the
        database cannot be reached.
        """
        try:
            db.execute(text("SELECT 1"))
            database_ok = True
        except SQLAlchemyError as exc:
            logger.warning(f"Health check failed: {exc}")
            database_ok = False

        return JSONResponse(
            status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "healthy" if database_ok else "unhealthy",
                "app": settings.app_name,
                "version": settings.api_version,
                "database": database_ok,
            },
        )

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn book_records.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m book_records.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "book_records.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
