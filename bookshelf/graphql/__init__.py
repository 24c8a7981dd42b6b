"""
GraphQL Package

This package provides the GraphQL API using Strawberry GraphQL.

Example Query:
    query {
        allBooks(genre: "refactoring") {
            title
            published
            author { name }
        }
    }

Example Mutation:
    mutation {
        addBook(
            title: "Clean Code"
            author: "Robert Martin"
            published: 2008
            genres: ["refactoring"]
        ) {
            title
            author { name }
        }
    }
"""

import strawberry
from strawberry.fastapi import GraphQLRouter

from bookshelf.graphql.context import get_context
from bookshelf.graphql.mutations import Mutation
from bookshelf.graphql.queries import Query

# Create the GraphQL schema
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


def create_graphql_router(graphql_ide: str | None = "apollo-sandbox") -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Args:
        graphql_ide: "graphiql", "apollo-sandbox", "pathfinder" or None to disable

    Returns:
        GraphQLRouter configured with schema and context
    """
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide=graphql_ide,
    )


__all__ = ["schema", "create_graphql_router"]
