"""Create authors, books and book_genres tables

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('authors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False, comment="Author's full name, used as the lookup key"),
        sa.Column('born', sa.Integer(), nullable=True, comment='Year the author was born'),
        sa.CheckConstraint('length(name) > 0', name='ck_authors_name_not_empty'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table('books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column('published', sa.Integer(), nullable=False, comment='Year of publication'),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.CheckConstraint('length(title) > 0', name='ck_books_title_not_empty'),
        sa.ForeignKeyConstraint(['author_id'], ['authors.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title')
    )
    op.create_index(op.f('ix_books_author_id'), 'books', ['author_id'], unique=False)
    op.create_table('book_genres',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False, comment='Genre name, matched exactly by the genre filter'),
        sa.CheckConstraint('length(name) > 0', name='ck_book_genres_name_not_empty'),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_book_genres_book_id'), 'book_genres', ['book_id'], unique=False)
    op.create_index(op.f('ix_book_genres_name'), 'book_genres', ['name'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_book_genres_name'), table_name='book_genres')
    op.drop_index(op.f('ix_book_genres_book_id'), table_name='book_genres')
    op.drop_table('book_genres')
    op.drop_index(op.f('ix_books_author_id'), table_name='books')
    op.drop_table('books')
    op.drop_table('authors')
