"""
Bookshelf GraphQL API Package

A small GraphQL API exposing books and their authors.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: Database connection object and session management
- main.py: FastAPI application factory and lifespan
- models/: SQLAlchemy ORM models (Author, Book, BookGenre)
- services/: Catalog operations used by the GraphQL resolvers
- graphql/: Strawberry schema, types, queries and mutations
"""

__version__ = "0.1.0"
