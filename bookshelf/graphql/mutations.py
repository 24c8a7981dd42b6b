"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.

Catalog failures while adding a book are reported as GraphQL errors with
extensions.code = "BAD_USER_INPUT", the offending value in
extensions.invalidArgs and, for database rejections, the underlying error
message in extensions.error.
"""

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from bookshelf.graphql.context import GraphQLContext
from bookshelf.graphql.queries import author_to_graphql, book_to_graphql
from bookshelf.graphql.types.author import AuthorType
from bookshelf.graphql.types.book import BookType
from bookshelf.services import catalog

BAD_USER_INPUT = "BAD_USER_INPUT"


def user_input_error(exc: catalog.CatalogError) -> GraphQLError:
    """Translate a catalog failure into a BAD_USER_INPUT GraphQL error."""
    extensions = {"code": BAD_USER_INPUT, "invalidArgs": exc.invalid_arg}
    if exc.__cause__ is not None:
        extensions["error"] = str(exc.__cause__)
    return GraphQLError(str(exc), extensions=extensions, original_error=exc)


@strawberry.type
class Mutation:
    """GraphQL Mutation type containing all write operations."""

    @strawberry.mutation(description="Add a book, creating its author if needed")
    def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> BookType | None:
        """
        Create a new book.

        If no author has the given name, one is created without a birth
        year. Author and book are saved in one transaction.
        """
        try:
            book = catalog.add_book(
                info.context.db,
                title=title,
                author_name=author,
                published=published,
                genres=genres,
            )
        except catalog.CatalogError as exc:
            raise user_input_error(exc) from exc

        return book_to_graphql(book)

    @strawberry.mutation(description="Set an author's birth year")
    def edit_author(
        self,
        info: Info[GraphQLContext, None],
        name: str,
        set_born_to: int,
    ) -> AuthorType | None:
        """
        Update the birth year of the author with the given name.

        Returns null when no author has that name.
        """
        author = catalog.set_author_born(info.context.db, name, set_born_to)
        if author is None:
            return None
        return author_to_graphql(author)
