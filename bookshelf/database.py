"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Bookshelf API.

Connection Object Pattern
=========================
Instead of a module-level engine created at import time, the store is
wrapped in a Database object with an explicit lifecycle:

1. Database(url) is cheap and never touches the network
2. connect() builds the engine and pings the server (application startup)
3. session() hands out sessions bound to that engine
4. dispose() closes pooled connections (application shutdown)

The application creates one Database in its lifespan handler and stores it
on app.state. Tests build their own Database against in-memory SQLite and
pass it to create_app(), so nothing global needs patching.

Session Management Pattern
==========================
We use the "session per request" pattern: get_db() opens a session for the
incoming request and closes it when the response has been sent.
"""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookshelf.config import Settings

logger = logging.getLogger(__name__)


class DatabaseUnavailableError(RuntimeError):
    """Raised when a session is requested but no engine could be created."""


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Connection Object
# =============================================================================
class Database:
    """
    Explicit handle on the application database.

    Attributes:
        url: Connection URL the engine is built from
        engine: SQLAlchemy engine, None until connect() succeeds in building it
        connected: Whether the last connect() could reach the server
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_options: Any):
        self.url = url
        self.echo = echo
        self.engine_options = engine_options
        self.engine: Engine | None = None
        self.connected = False
        self._session_factory: sessionmaker[Session] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """
        Build a Database using the pool options from application settings.

        SQLite does not take pool sizing arguments, and needs
        check_same_thread=False because FastAPI runs sync dependencies in a
        thread pool.
        """
        if settings.is_sqlite:
            return cls(
                settings.database_url,
                echo=settings.debug,
                connect_args={"check_same_thread": False},
            )
        return cls(
            settings.database_url,
            echo=settings.debug,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,  # Verify connections are alive before using
        )

    @property
    def display_url(self) -> str:
        """Connection URL with the password masked, safe for logs."""
        try:
            return make_url(self.url).render_as_string(hide_password=True)
        except SQLAlchemyError:
            return "<invalid database url>"

    def connect(self) -> bool:
        """
        Create the engine and check that the server answers.

        Failures are logged, not raised: the application keeps running
        without a usable store. If only the ping fails, the engine is kept
        so later requests can succeed once the server comes up.

        Returns:
            True if the server could be reached
        """
        logger.info(f"connecting to {self.display_url}")

        if self.engine is None:
            try:
                self.engine = create_engine(self.url, echo=self.echo, **self.engine_options)
            except (SQLAlchemyError, ImportError) as exc:
                logger.error(f"error connecting to database: {exc}")
                self.connected = False
                return False
            self._session_factory = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=self.engine,
            )

        self.connected = self.ping()
        if self.connected:
            logger.info("connected to database")
        return self.connected

    def ping(self) -> bool:
        """Run a trivial statement to check the server is reachable."""
        if self.engine is None:
            return False
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error(f"error connecting to database: {exc}")
            return False
        return True

    def session(self) -> Session:
        """
        Open a new session.

        Raises:
            DatabaseUnavailableError: If connect() never built an engine
        """
        if self._session_factory is None:
            raise DatabaseUnavailableError("Database is not configured")
        return self._session_factory()

    def create_tables(self) -> None:
        """
        Create all tables.

        Handy for development and tests. In production, use Alembic
        migrations instead.
        """
        if self.engine is None:
            raise DatabaseUnavailableError("Database is not configured")
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all tables. Only for development and tests."""
        if self.engine is None:
            raise DatabaseUnavailableError("Database is not configured")
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("database connections closed")
        self.connected = False


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Opens a session on the application's Database and closes it when the
    request ends, even if the handler raised.

    Yields:
        SQLAlchemy Session instance
    """
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
