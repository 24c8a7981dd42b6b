"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests pass their own Database to create_app()

2. Lifespan Events
   - startup: connect to the database (failures are logged, not fatal)
   - shutdown: close pooled connections

3. Exception Handlers
   - Log database errors that reach the HTTP layer
   - Standardize error format
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bookshelf import __version__
from bookshelf.config import get_settings
from bookshelf.database import Database, DatabaseUnavailableError
from bookshelf.graphql import create_graphql_router

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Application Factory
# =============================================================================
def create_app(database: Database | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Database to serve from. When omitted, one is built from
            settings at startup and disposed at shutdown.

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ----- STARTUP -----
        logger.info(f"Starting {settings.app_name}...")
        logger.info(f"Debug mode: {settings.debug}")

        owns_database = database is None
        db = Database.from_settings(settings) if owns_database else database
        app.state.database = db

        if not db.connect():
            logger.warning("Database unavailable - GraphQL operations will fail until it is reachable")

        yield  # Application runs here

        # ----- SHUTDOWN -----
        logger.info(f"Shutting down {settings.app_name}...")
        if owns_database:
            db.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="GraphQL API for a small library of books and authors.",
        version=__version__,
        lifespan=lifespan,
    )

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
    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "A database error occurred. Please try again later."
            },
        )

    @app.exception_handler(DatabaseUnavailableError)
    async def database_unavailable_handler(
        request: Request,
        exc: DatabaseUnavailableError,
    ) -> JSONResponse:
        """Report requests that need the database while it is not configured."""
        logger.error(f"Request to {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=503,
            content={"detail": "Database unavailable"},
        )

    # -------------------------------------------------------------------------
    # GraphQL Endpoint
    # -------------------------------------------------------------------------
    graphql_router = create_graphql_router(graphql_ide=settings.graphql_ide)
    app.include_router(graphql_router, prefix="/graphql", tags=["GraphQL"])

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and can reach its database.",
    )
    def health_check(request: Request) -> dict:
        """
        Health check endpoint.

        Used by load balancers and container probes. The API stays up
        without a database, so the store state is reported, not enforced.
        """
        db: Database = request.app.state.database
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
            "database": "connected" if db.ping() else "unavailable",
            "graphql": {
                "endpoint": "/graphql",
                "ide": settings.graphql_ide,
            },
        }

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
            "graphql": "/graphql",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookshelf.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookshelf.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
