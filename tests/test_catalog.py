"""
Tests for the Catalog Service

Exercises the store operations directly against the test session,
without going through HTTP or GraphQL.
"""

import pytest
from sqlalchemy import event, select
from sqlalchemy.orm import Session

from bookshelf.database import Database
from bookshelf.models import Author, Book, BookGenre
from bookshelf.services import catalog


class TestCounts:
    def test_counts_empty(self, db_session: Session):
        assert catalog.count_books(db_session) == 0
        assert catalog.count_authors(db_session) == 0

    def test_counts_with_library(self, db_session: Session, library: list[Book]):
        assert catalog.count_books(db_session) == 7
        assert catalog.count_authors(db_session) == 5


class TestFindBooks:
    def test_no_filters_returns_everything(self, db_session: Session, library: list[Book]):
        books = catalog.find_books(db_session)

        assert [b.id for b in books] == [b.id for b in library]

    def test_genre_filter_is_exact_subset(self, db_session: Session, library: list[Book]):
        books = catalog.find_books(db_session, genre="patterns")

        expected = {b.title for b in library if "patterns" in b.genres}
        assert {b.title for b in books} == expected
        assert expected == {"Agile software development", "Refactoring to patterns"}

    def test_unknown_genre(self, db_session: Session, library: list[Book]):
        assert catalog.find_books(db_session, genre="poetry") == []

    def test_unknown_author(self, db_session: Session, library: list[Book]):
        assert catalog.find_books(db_session, author="Nobody") == []

    def test_author_is_loaded(self, db_session: Session, library: list[Book]):
        books = catalog.find_books(db_session, author="Sandi Metz")
        db_session.expunge_all()

        assert [b.author.name for b in books] == ["Sandi Metz"]
        assert books[0].genres == ["refactoring", "design"]


class TestAuthorsWithBookCounts:
    def test_counts_match_books(self, db_session: Session, library: list[Book]):
        rows = catalog.authors_with_book_counts(db_session)

        for author, count in rows:
            expected = db_session.scalars(
                select(Book).where(Book.author_id == author.id)
            ).all()
            assert count == len(expected)

    def test_insertion_order(self, db_session: Session, library: list[Book]):
        names = [author.name for author, _ in catalog.authors_with_book_counts(db_session)]

        assert names == [
            "Robert Martin",
            "Martin Fowler",
            "Joshua Kerievsky",
            "Sandi Metz",
            "Fyodor Dostoevsky",
        ]

    def test_single_query(self, database: Database, db_session: Session, library: list[Book]):
        statements = []

        def record(conn, cursor, statement, parameters, context, executemany):
            statements.append(statement)

        event.listen(database.engine, "before_cursor_execute", record)
        try:
            catalog.authors_with_book_counts(db_session)
        finally:
            event.remove(database.engine, "before_cursor_execute", record)

        assert len(statements) == 1


class TestAddBook:
    def test_creates_author_once(self, db_session: Session):
        catalog.add_book(db_session, "Crime and punishment", "Fyodor Dostoevsky", 1866, ["classic"])
        catalog.add_book(db_session, "Demons", "Fyodor Dostoevsky", 1872, ["classic"])

        assert catalog.count_authors(db_session) == 1
        author = catalog.get_author_by_name(db_session, "Fyodor Dostoevsky")
        assert author.born is None
        assert sorted(b.title for b in author.books) == ["Crime and punishment", "Demons"]

    def test_returns_saved_book(self, db_session: Session):
        book = catalog.add_book(db_session, "Clean Code", "Robert Martin", 2008, ["dev", "classic"])

        assert book.id is not None
        assert book.title == "Clean Code"
        assert book.published == 2008
        assert book.genres == ["dev", "classic"]
        assert book.author.name == "Robert Martin"

    def test_genre_positions(self, db_session: Session):
        book = catalog.add_book(db_session, "Agile software development", "Robert Martin", 2002, ["agile", "patterns", "design"])

        entries = db_session.scalars(
            select(BookGenre).where(BookGenre.book_id == book.id).order_by(BookGenre.position)
        ).all()
        assert [(e.position, e.name) for e in entries] == [(0, "agile"), (1, "patterns"), (2, "design")]

    def test_duplicate_title(self, db_session: Session, sample_book: Book):
        with pytest.raises(catalog.DuplicateTitleError) as exc_info:
            catalog.add_book(db_session, "Clean Code", "Somebody Else", 2020, [])

        assert exc_info.value.invalid_arg == "Clean Code"
        assert str(exc_info.value) == "Book title must be unique"
        # The duplicate check runs before any author is created
        assert catalog.count_authors(db_session) == 1

    def test_author_persist_failure(self, db_session: Session):
        with pytest.raises(catalog.AuthorPersistError) as exc_info:
            catalog.add_book(db_session, "Untitled", "", 2020, [])

        assert exc_info.value.invalid_arg == ""
        assert exc_info.value.__cause__ is not None
        assert catalog.count_authors(db_session) == 0

    def test_book_persist_failure_leaves_no_orphan_author(self, db_session: Session):
        with pytest.raises(catalog.BookPersistError) as exc_info:
            catalog.add_book(db_session, "", "Martin Fowler", 2018, [])

        assert exc_info.value.invalid_arg == ""
        assert catalog.count_books(db_session) == 0
        assert catalog.get_author_by_name(db_session, "Martin Fowler") is None

    def test_book_persist_failure_keeps_existing_author(self, db_session: Session, sample_author: Author):
        with pytest.raises(catalog.BookPersistError):
            catalog.add_book(db_session, "", "Robert Martin", 2018, [])

        assert catalog.get_author_by_name(db_session, "Robert Martin") is not None

    def test_empty_genre_is_rejected(self, db_session: Session):
        with pytest.raises(catalog.BookPersistError) as exc_info:
            catalog.add_book(db_session, "Clean Code", "Robert Martin", 2008, ["", "dev"])

        assert exc_info.value.invalid_arg == "Clean Code"
        assert catalog.count_books(db_session) == 0
        assert catalog.get_author_by_name(db_session, "Robert Martin") is None

    def test_concurrent_duplicate_title(self, tmp_path, monkeypatch):
        """A same-title book committed after the duplicate check is caught by the unique constraint."""
        database = Database(
            f"sqlite:///{tmp_path / 'catalog.db'}",
            connect_args={"check_same_thread": False},
        )
        assert database.connect()
        database.create_tables()

        lookup = catalog.get_author_by_name
        rival_committed = []

        def lookup_after_rival_commit(db, name):
            # Runs between the title check and the inserts of the first session
            if not rival_committed:
                rival_committed.append(True)
                with database.session() as rival:
                    catalog.add_book(rival, "Clean Code", "Martin Fowler", 2018, ["refactoring"])
            return lookup(db, name)

        monkeypatch.setattr(catalog, "get_author_by_name", lookup_after_rival_commit)

        session = database.session()
        try:
            with pytest.raises(catalog.BookPersistError) as exc_info:
                catalog.add_book(session, "Clean Code", "Robert Martin", 2008, ["dev"])

            assert exc_info.value.invalid_arg == "Clean Code"
            assert exc_info.value.__cause__ is not None
        finally:
            session.close()

        monkeypatch.undo()
        with database.session() as check:
            assert catalog.count_books(check) == 1
            assert catalog.count_authors(check) == 1
            assert catalog.get_author_by_name(check, "Robert Martin") is None
            assert catalog.find_books(check)[0].author.name == "Martin Fowler"

        database.drop_tables()
        database.dispose()


class TestSetAuthorBorn:
    def test_updates_born(self, db_session: Session, sample_author: Author):
        author = catalog.set_author_born(db_session, "Robert Martin", 1958)

        assert author.id == sample_author.id
        assert author.born == 1958

    def test_missing_author(self, db_session: Session, sample_author: Author):
        assert catalog.set_author_born(db_session, "Nobody", 1900) is None

        db_session.refresh(sample_author)
        assert sample_author.born == 1952
