#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with a small sample library for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing data (optional)
3. Adds books through the catalog service, which creates their authors
4. Sets the known birth years
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookshelf.config import get_settings
from bookshelf.database import Database
from bookshelf.models import Author, Book, BookGenre
from bookshelf.services import catalog

BOOKS = [
    {
        "title": "Clean Code",
        "published": 2008,
        "author": "Robert Martin",
        "genres": ["refactoring"],
    },
    {
        "title": "Agile software development",
        "published": 2002,
        "author": "Robert Martin",
        "genres": ["agile", "patterns", "design"],
    },
    {
        "title": "Refactoring, edition 2",
        "published": 2018,
        "author": "Martin Fowler",
        "genres": ["refactoring"],
    },
    {
        "title": "Refactoring to patterns",
        "published": 2008,
        "author": "Joshua Kerievsky",
        "genres": ["refactoring", "patterns"],
    },
    {
        "title": "Practical Object-Oriented Design, An Agile Primer Using Ruby",
        "published": 2012,
        "author": "Sandi Metz",
        "genres": ["refactoring", "design"],
    },
    {
        "title": "Crime and punishment",
        "published": 1866,
        "author": "Fyodor Dostoevsky",
        "genres": ["classic", "crime"],
    },
    {
        "title": "Demons",
        "published": 1872,
        "author": "Fyodor Dostoevsky",
        "genres": ["classic", "revolution"],
    },
]

BIRTH_YEARS = {
    "Robert Martin": 1952,
    "Martin Fowler": 1963,
    "Fyodor Dostoevsky": 1821,
}


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(BookGenre))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.commit()
    print("Data cleared.")


def create_books(db: Session) -> list[Book]:
    """Add the sample books; authors are created along the way."""
    print("Creating books...")
    books = [
        catalog.add_book(
            db,
            title=data["title"],
            author_name=data["author"],
            published=data["published"],
            genres=data["genres"],
        )
        for data in BOOKS
    ]
    print(f"Created {len(books)} books.")
    return books


def set_birth_years(db: Session) -> None:
    """Fill in the birth years we know about."""
    for name, born in BIRTH_YEARS.items():
        catalog.set_author_born(db, name, born)


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    settings = get_settings()
    database = Database.from_settings(settings)
    if not database.connect():
        sys.exit("Could not connect to the database, check DATABASE_URL")

    # Create tables if they don't exist
    database.create_tables()

    db = database.session()

    try:
        if clear_existing:
            clear_data(db)

        books = create_books(db)
        set_birth_years(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {catalog.count_authors(db)}")
        print(f"  - Books: {len(books)}")
        print(f"\nGraphQL endpoint at http://localhost:{settings.port}/graphql")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    seed_database()
