"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Logging is configured here, not at import time

2. Lifespan Events
   - startup: check the database is reachable and create missing tables;
     any failure aborts startup
   - shutdown: dispose the connection pool

3. Exception Handlers
   - Request validation errors (malformed JSON, schema violations) -> 400
   - Database errors that escape a handler -> 500
   - Anything else -> 500

4. Graceful Shutdown
   - uvicorn stops accepting connections on SIGINT/SIGTERM and waits up to
     SHUTDOWN_TIMEOUT seconds for in-flight requests before exiting
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from crud_app import __version__
from crud_app.config import get_settings
from crud_app.database import check_connection, create_tables, engine
from crud_app.logging_config import configure_logging
from crud_app.routers import auth_router, books_router

settings = get_settings()


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    Startup failures are fatal: the exception propagates and uvicorn exits
    without serving requests.
    """
    logger: logging.Logger = app.state.logger

    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")

    try:
        check_connection()
        if settings.db_auto_create:
            create_tables()
    except SQLAlchemyError as exc:
        logger.critical(f"Database unavailable at startup: {exc}")
        raise

    logger.info(f"SERVER STARTED AT {datetime.now(UTC).isoformat()}")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()
    logger.info("Server exited properly")


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    logger = configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="""
## crud-app

CRUD API for books, with user sign-up and sign-in.

### Features
- **Books**: create, list, get, partial update, delete
- **Auth**: sign-up, sign-in (JWT access + refresh token), token refresh
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.logger = logger

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Report invalid request input as 400.

        Covers malformed JSON bodies as well as schema violations.
        """
        logger.warning(
            f"Invalid request input: {exc.errors()}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "problem": "invalid input",
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle database errors not translated by a route.

        Logs the actual error while hiding details from users.
        """
        logger.error(
            f"Database error: {exc}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "problem": "database error",
            },
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "A database error occurred. Please try again later."
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In debug mode the error message is returned to the client.
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
    app.include_router(auth_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and the database answers.",
    )
    def health_check() -> dict:
        """Report service version and database reachability."""
        try:
            check_connection()
            database_ok = True
        except SQLAlchemyError as exc:
            logger.warning(f"Health check: database unreachable: {exc}")
            database_ok = False

        return {
            "status": "healthy" if database_ok else "degraded",
            "app": settings.app_name,
            "version": __version__,
            "database": database_ok,
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn crud_app.main:app

app = create_app()


# =============================================================================
# Server Runner
# =============================================================================
def run() -> None:
    """
    Run the server with uvicorn.

    Installed as the ``crud-app`` console script; also runs with
    ``python -m crud_app.main``.
    """
    import uvicorn

    uvicorn.run(
        "crud_app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )


if __name__ == "__main__":
    run()
