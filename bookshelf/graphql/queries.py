"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
Each resolver fetches data through the catalog service using the session
from the context.
"""

import strawberry
from strawberry.types import Info

from bookshelf.graphql.context import GraphQLContext
from bookshelf.graphql.types.author import AuthorType
from bookshelf.graphql.types.book import BookType
from bookshelf.models import Author, Book
from bookshelf.services import catalog


def author_to_graphql(author: Author, book_count: int | None = None) -> AuthorType:
    """Convert SQLAlchemy Author model to GraphQL AuthorType."""
    return AuthorType(
        name=author.name,
        id=strawberry.ID(str(author.id)),
        born=author.born,
        book_count=book_count,
    )


def book_to_graphql(book: Book) -> BookType:
    """Convert SQLAlchemy Book model to GraphQL BookType with its author inlined."""
    return BookType(
        title=book.title,
        published=book.published,
        author=author_to_graphql(book.author),
        genres=list(book.genres),
        id=strawberry.ID(str(book.id)),
    )


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    All resolvers receive an `info` parameter that contains the
    GraphQL context with the database session.
    """

    @strawberry.field(description="Total number of books")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_books(info.context.db)

    @strawberry.field(description="Total number of authors")
    def author_count(self, info: Info[GraphQLContext, None]) -> int:
        return catalog.count_authors(info.context.db)

    @strawberry.field(description="List books, optionally filtered by author name and genre")
    def all_books(
        self,
        info: Info[GraphQLContext, None],
        author: str | None = None,
        genre: str | None = None,
    ) -> list[BookType] | None:
        """
        Get books with optional filtering.

        Args:
            author: Exact author name; an unknown name gives an empty list
            genre: Only books whose genres contain this exact string

        Returns:
            Matching books, each with its author
        """
        books = catalog.find_books(info.context.db, author=author, genre=genre)
        return [book_to_graphql(b) for b in books]

    @strawberry.field(description="List all authors with their number of books")
    def all_authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType] | None:
        rows = catalog.authors_with_book_counts(info.context.db)
        return [author_to_graphql(author, book_count=count) for author, count in rows]
