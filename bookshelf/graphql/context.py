"""
GraphQL Context

Provides request context to all GraphQL resolvers, most importantly the
database session for the request.

The context is created fresh for each GraphQL request and passed to all
resolvers via the `info` parameter.
"""

from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from bookshelf.database import get_db


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Inherits from Strawberry's BaseContext for proper integration.

    Attributes:
        db: SQLAlchemy database session
    """

    def __init__(self, db: Session):
        super().__init__()
        self.db = db


async def get_context(db: Session = Depends(get_db)) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Strawberry resolves FastAPI dependencies declared on the context
    getter, so the session comes from get_db() and is closed once the
    response has been sent. Tests swap the session by overriding get_db.

    Args:
        db: Request-scoped database session

    Returns:
        GraphQLContext wrapping the session
    """
    return GraphQLContext(db=db)
