"""
Author Model

Represents an author in the bookshelf database.

Authors are never created directly through the API: addBook creates one
the first time a book names an unknown author. The name is the lookup key
for edits and filters, so it carries a unique constraint.

SQLAlchemy 2.0 Features Used:
- mapped_column(): New way to define columns with full type support
- Mapped[]: Type hint wrapper for SQLAlchemy columns
- relationship(): Define relationships between models
- back_populates: Two-way relationship binding
"""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base

# TYPE_CHECKING is True only during type checking (mypy, IDE)
# This prevents circular imports at runtime while enabling type hints
if TYPE_CHECKING:
    from bookshelf.models.book import Book


class Author(Base):
    """
    Author model representing writers in the system.

    Table: authors

    Relationships:
    - books: One-to-Many, every Book references exactly one Author

    Constraints:
    - name: unique and non-empty

    Example:
        author = Author(name="Robert Martin", born=1952)
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"
    __table_args__ = (
        CheckConstraint("length(name) > 0", name="ck_authors_name_not_empty"),
    )

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    # unique=True creates a unique index, which also serves name lookups
    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        comment="Author's full name, used as the lookup key"
    )

    # Absent until editAuthor sets it
    born: Mapped[int | None] = mapped_column(
        nullable=True,
        comment="Year the author was born"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # author.books  # Get all books by this author
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    def __repr__(self) -> str:
        """
        Developer-friendly string representation.

            >>> Author(name="Sandi Metz")
            Author(id=None, name='Sandi Metz')
        """
        return f"Author(id={self.id}, name='{self.name}')"
