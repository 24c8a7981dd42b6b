"""
GraphQL Author Type

Defines the Author type for GraphQL queries.
"""

import strawberry


@strawberry.type(name="Author")
class AuthorType:
    """
    GraphQL type representing a book author.

    Maps to the Author SQLAlchemy model. book_count is derived at query
    time and only filled in by allAuthors; elsewhere it is null.
    """

    name: str
    id: strawberry.ID
    born: int | None = None
    book_count: int | None = None
