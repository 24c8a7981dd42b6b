"""
GraphQL Book Type

Defines the Book type for GraphQL queries.
"""

import strawberry

from bookshelf.graphql.types.author import AuthorType


@strawberry.type(name="Book")
class BookType:
    """
    GraphQL type representing a book.

    Maps to the Book SQLAlchemy model with its author inlined.
    """

    title: str
    published: int
    author: AuthorType
    genres: list[str]
    id: strawberry.ID
