"""
Book Model

The central model of the Bookshelf API, representing books in the database.

This file also contains the BookGenre model that stores a book's genres.

WHY a Genre Table?
==================
Genres are plain strings attached to a single book, in the order they were
given. Keeping them in their own table (book_id, position, name) lets the
genre filter run as an indexed EXISTS query on any database, while the
ordering_list keeps the original order when the list is read back.

Book.genres exposes the list of names directly through an association
proxy, so application code reads and writes a plain list[str]:

    book = Book(title="Refactoring", published=1999, genres=["refactoring"])
    book.genres.append("classic")
"""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base

if TYPE_CHECKING:
    from bookshelf.models.author import Author


class BookGenre(Base):
    """
    One genre entry of a book.

    Table: book_genres

    position records the index of the genre in the book's genre list.
    """

    __tablename__ = "book_genres"
    __table_args__ = (
        CheckConstraint("length(name) > 0", name="ck_book_genres_name_not_empty"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    position: Mapped[int] = mapped_column(nullable=False)
    name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Genre name, matched exactly by the genre filter"
    )

    book: Mapped["Book"] = relationship("Book", back_populates="genre_entries")

    def __repr__(self) -> str:
        return f"BookGenre(book_id={self.book_id}, position={self.position}, name='{self.name}')"


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required, unique)
    - published: Publication year
    - author_id: Reference to the single author of the book
    - genres: Ordered list of non-empty genre names (the list may be empty)

    Example:
        book = Book(
            title="Clean Code",
            published=2008,
            author=author,
            genres=["refactoring"],
        )
    """

    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("length(title) > 0", name="ck_books_title_not_empty"),
    )

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    # The resolver checks for duplicates before inserting; the unique index
    # still rejects a duplicate that slips in between check and insert.
    title: Mapped[str] = mapped_column(
        String(500),
        unique=True,
        nullable=False,
        comment="Book title"
    )

    published: Mapped[int] = mapped_column(
        nullable=False,
        comment="Year of publication"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    # ordering_list keeps BookGenre.position in sync with the list index
    genre_entries: Mapped[list[BookGenre]] = relationship(
        BookGenre,
        back_populates="book",
        order_by=BookGenre.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    genres: AssociationProxy[list[str]] = association_proxy(
        "genre_entries",
        "name",
        creator=lambda name: BookGenre(name=name),
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}')"
