"""
Initial schema: persons, users, friends, authors, books and genres.

Revision ID: 20261017_000000_initial_schema
Revises:
Create Date: 2026-10-17 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20261017_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "persons",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("street", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id", name="persons_pkey"),
        sa.UniqueConstraint("name", name="persons_name_key"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("favorite_genre", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
        sa.UniqueConstraint("username", name="users_username_key"),
    )

    op.create_table(
        "user_friends",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("person_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="user_friends_user_id_fkey"
        ),
        sa.ForeignKeyConstraint(["person_id"], ["persons.id"], name="user_friends_person_id_fkey"),
        sa.PrimaryKeyConstraint("user_id", "person_id", name="user_friends_pkey"),
    )
    op.create_index("idx_user_friends_person", "user_friends", ["person_id"])

    op.create_table(
        "authors",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("born", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="authors_pkey"),
        sa.UniqueConstraint("name", name="authors_name_key"),
    )

    op.create_table(
        "books",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("published", sa.Integer(), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id", name="books_pkey"),
        sa.UniqueConstraint("title", name="books_title_key"),
    )
    op.create_index("idx_books_author", "books", ["author"])

    op.create_table(
        "book_genres",
        sa.Column("book_id", sa.Uuid(), nullable=False),
        sa.Column("genre", sa.String(length=255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["book_id"], ["books.id"], ondelete="CASCADE", name="book_genres_book_id_fkey"
        ),
        sa.PrimaryKeyConstraint("book_id", "genre", name="book_genres_pkey"),
    )
    op.create_index("idx_book_genres_genre", "book_genres", ["genre"])


def downgrade() -> None:
    op.drop_index("idx_book_genres_genre", table_name="book_genres")
    op.drop_table("book_genres")
    op.drop_index("idx_books_author", table_name="books")
    op.drop_table("books")
    op.drop_table("authors")
    op.drop_index("idx_user_friends_person", table_name="user_friends")
    op.drop_table("user_friends")
    op.drop_table("users")
    op.drop_table("persons")
