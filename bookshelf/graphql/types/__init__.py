"""
GraphQL Types Package

This package contains the GraphQL type definitions that map to our
SQLAlchemy models. Types are defined using Strawberry's decorator syntax.

Types defined here:
- BookType: exposed as "Book", with its author inlined
- AuthorType: exposed as "Author", with an optional derived book count
"""

from bookshelf.graphql.types.author import AuthorType
from bookshelf.graphql.types.book import BookType

__all__ = [
    "AuthorType",
    "BookType",
]
