"""
SQLAlchemy Models Package

This package contains all database models for the Bookshelf API.

Model Relationships:
- Author -> Book: One-to-Many (every book has exactly one author)
- Book -> BookGenre: One-to-Many, ordered (a book's genre list)

Import all models here to:
1. Make them available as: from bookshelf.models import Book, Author
2. Ensure Alembic discovers them for migrations
"""

# The order matters for SQLAlchemy to resolve relationships
from bookshelf.models.author import Author
from bookshelf.models.book import Book, BookGenre

__all__ = [
    "Author",
    "Book",
    "BookGenre",
]
