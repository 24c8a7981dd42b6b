"""
Catalog Service

Store operations behind the GraphQL resolvers: counting, filtering books,
aggregating book counts per author, adding books and editing authors.

The functions take a Session and return ORM objects; turning them into
GraphQL types is the resolvers' job. Failures while adding a book are
raised as CatalogError subclasses with the underlying database error
chained as __cause__.
"""

import logging
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from bookshelf.models import Author, Book, BookGenre

logger = logging.getLogger(__name__)


# =============================================================================
# Errors
# =============================================================================


class CatalogError(Exception):
    """
    Base class for failures while adding to the catalog.

    Attributes:
        invalid_arg: The input value the failure is attributed to
    """

    message = "Catalog operation failed"

    def __init__(self, invalid_arg: str):
        super().__init__(self.message)
        self.invalid_arg = invalid_arg


class DuplicateTitleError(CatalogError):
    """Raised when a book with the same title already exists."""

    message = "Book title must be unique"


class AuthorPersistError(CatalogError):
    """Raised when a new author could not be saved."""

    message = "Saving author failed"


class BookPersistError(CatalogError):
    """Raised when a new book could not be saved."""

    message = "Saving book failed"


# =============================================================================
# Queries
# =============================================================================


def count_books(db: Session) -> int:
    """Total number of books."""
    return db.scalar(select(func.count()).select_from(Book)) or 0


def count_authors(db: Session) -> int:
    """Total number of authors."""
    return db.scalar(select(func.count()).select_from(Author)) or 0


def get_author_by_name(db: Session, name: str) -> Author | None:
    """Find an author by exact name. Names are unique, so at most one matches."""
    return db.execute(select(Author).where(Author.name == name)).scalar_one_or_none()


def find_books(
    db: Session,
    author: str | None = None,
    genre: str | None = None,
) -> Sequence[Book]:
    """
    List books, optionally filtered by author name and/or genre.

    Both filters must match when both are given. The author and the genre
    list are eagerly loaded so callers can read them after the session
    closes.

    Args:
        db: Database session
        author: Exact author name
        genre: Exact, case-sensitive genre name

    Returns:
        Matching books in insertion order; empty if the author is unknown
    """
    stmt = select(Book).options(
        selectinload(Book.author),
        selectinload(Book.genre_entries),
    )

    if author:
        found = get_author_by_name(db, author)
        if found is None:
            return []
        stmt = stmt.where(Book.author_id == found.id)

    if genre:
        stmt = stmt.where(Book.genre_entries.any(BookGenre.name == genre))

    return db.execute(stmt.order_by(Book.id)).scalars().all()


def authors_with_book_counts(db: Session) -> list[tuple[Author, int]]:
    """
    Every author paired with the number of books referencing it.

    A single grouped query: authors are outer-joined to their books so
    authors without books report 0.

    Returns:
        (author, book_count) pairs in insertion order
    """
    stmt = (
        select(Author, func.count(Book.id))
        .outerjoin(Book, Book.author_id == Author.id)
        .group_by(Author.id)
        .order_by(Author.id)
    )
    return [(author, count) for author, count in db.execute(stmt).all()]


# =============================================================================
# Mutations
# =============================================================================


def add_book(
    db: Session,
    title: str,
    author_name: str,
    published: int,
    genres: Sequence[str],
) -> Book:
    """
    Add a book, creating its author if no author has that name yet.

    The author insert and the book insert share one transaction: if the
    book cannot be saved, an author created for it is rolled back too.

    Args:
        db: Database session
        title: Book title, must not exist yet
        author_name: Name of a new or existing author
        published: Publication year
        genres: Genre names, order is preserved

    Returns:
        The saved book with its author loaded

    Raises:
        DuplicateTitleError: A book with this title already exists
        AuthorPersistError: The new author was rejected by the database
        BookPersistError: The book was rejected by the database
    """
    existing = db.scalar(select(Book.id).where(Book.title == title))
    if existing is not None:
        raise DuplicateTitleError(title)

    author = get_author_by_name(db, author_name)
    if author is None:
        author = Author(name=author_name)
        db.add(author)
        try:
            db.flush()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning(f"Saving author '{author_name}' failed: {exc}")
            raise AuthorPersistError(author_name) from exc
        logger.info(f"Created author '{author_name}'")

    book = Book(
        title=title,
        published=published,
        author=author,
        genres=list(genres),
    )
    db.add(book)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning(f"Saving book '{title}' failed: {exc}")
        raise BookPersistError(title) from exc

    db.refresh(book)
    logger.info(f"Added book '{title}' by '{author.name}'")
    return book


def set_author_born(db: Session, name: str, born: int) -> Author | None:
    """
    Set the birth year of the author with the given name.

    Returns:
        The updated author, or None if no author has that name
    """
    author = get_author_by_name(db, name)
    if author is None:
        return None

    author.born = born
    db.commit()
    db.refresh(author)
    logger.info(f"Set born={born} for author '{name}'")
    return author
