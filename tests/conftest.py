"""
pytest Fixtures for Bookshelf API Tests

This file contains shared fixtures used across all test files.

FIXTURE LAYOUT:
- database: a fresh in-memory SQLite Database per test
- db_session: a session on that database
- client: a TestClient for an app built around the test database, with
  get_db overridden so requests share db_session
- sample_*: seeded authors and books
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from bookshelf.database import Database, get_db
from bookshelf.main import create_app
from bookshelf.models import Author, Book
from bookshelf.services import catalog

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory is fast and needs no external server. StaticPool keeps a
# single connection alive, without it the in-memory database would vanish
# between connections.


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """Create a connected in-memory Database with all tables."""
    database = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    assert database.connect()
    database.create_tables()

    yield database

    database.drop_tables()
    database.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, None, None]:
    """Create a database session for each test."""
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def client(database: Database, db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    The app is built around the test Database, and get_db is overridden so
    GraphQL resolvers see the same session as the fixtures.
    """
    app = create_app(database=database)

    def override_get_db():
        """Provide test database session instead of a fresh one."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(name="Robert Martin", born=1952)
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book by sample_author."""
    book = Book(
        title="Clean Code",
        published=2008,
        author=sample_author,
        genres=["refactoring"],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


LIBRARY = [
    ("Clean Code", "Robert Martin", 2008, ["refactoring"]),
    ("Agile software development", "Robert Martin", 2002, ["agile", "patterns", "design"]),
    ("Refactoring, edition 2", "Martin Fowler", 2018, ["refactoring"]),
    ("Refactoring to patterns", "Joshua Kerievsky", 2008, ["refactoring", "patterns"]),
    ("Practical Object-Oriented Design, An Agile Primer Using Ruby", "Sandi Metz", 2012, ["refactoring", "design"]),
    ("Crime and punishment", "Fyodor Dostoevsky", 1866, ["classic", "crime"]),
    ("Demons", "Fyodor Dostoevsky", 1872, ["classic", "revolution"]),
]


@pytest.fixture
def library(db_session: Session) -> list[Book]:
    """Seed seven books by five authors through the catalog service."""
    return [
        catalog.add_book(db_session, title, author, published, genres)
        for title, author, published, genres in LIBRARY
    ]
