"""
Database models for the phonebook (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.

Each model lists `__min_lengths__` for its string fields; the entity store
checks these before writing.
"""

from typing import ClassVar
from uuid import UUID, uuid4

from sqlalchemy import (
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)

    __min_lengths__: ClassVar[dict[str, int]] = {}


class UserFriends(Base):
    """Weak reference from a user to a person; the primary key gives set semantics."""

    __tablename__ = "user_friends"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="user_friends_user_id_fkey"
        ),
        ForeignKeyConstraint(["person_id"], ["persons.id"], name="user_friends_person_id_fkey"),
        PrimaryKeyConstraint("user_id", "person_id", name="user_friends_pkey"),
        Index("idx_user_friends_person", "person_id"),
    )

    user_id: Mapped[UUID] = mapped_column(Uuid)
    person_id: Mapped[UUID] = mapped_column(Uuid)


class Persons(Base):
    __tablename__ = "persons"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="persons_pkey"),
        UniqueConstraint("name", name="persons_name_key"),
    )
    __min_lengths__ = {"name": 3, "phone": 5, "street": 5, "city": 3}

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64))
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="users_pkey"),
        UniqueConstraint("username", name="users_username_key"),
    )
    __min_lengths__ = {"username": 3}

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    favorite_genre: Mapped[str | None] = mapped_column(String(255))

    friends: Mapped[list["Persons"]] = relationship(
        "Persons", secondary="user_friends", uselist=True, order_by="Persons.name"
    )


class Authors(Base):
    __tablename__ = "authors"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="authors_pkey"),
        UniqueConstraint("name", name="authors_name_key"),
    )
    __min_lengths__ = {"name": 4}

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    born: Mapped[int | None] = mapped_column(Integer)


class Books(Base):
    __tablename__ = "books"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="books_pkey"),
        UniqueConstraint("title", name="books_title_key"),
        Index("idx_books_author", "author"),
    )
    __min_lengths__ = {"title": 2}

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    published: Mapped[int] = mapped_column(Integer, nullable=False)
    # Free-text author name, not a foreign key to authors
    author: Mapped[str] = mapped_column(String(255), nullable=False)

    genre_rows: Mapped[list["BookGenres"]] = relationship(
        "BookGenres",
        uselist=True,
        back_populates="book",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BookGenres.position",
    )

    @property
    def genres(self) -> list[str]:
        return [row.genre for row in self.genre_rows]

    @genres.setter
    def genres(self, values: list[str]) -> None:
        unique = list(dict.fromkeys(values))
        self.genre_rows = [
            BookGenres(genre=genre, position=index) for index, genre in enumerate(unique)
        ]


class BookGenres(Base):
    __tablename__ = "book_genres"
    __table_args__ = (
        ForeignKeyConstraint(
            ["book_id"], ["books.id"], ondelete="CASCADE", name="book_genres_book_id_fkey"
        ),
        PrimaryKeyConstraint("book_id", "genre", name="book_genres_pkey"),
        Index("idx_book_genres_genre", "genre"),
    )

    book_id: Mapped[UUID] = mapped_column(Uuid)
    genre: Mapped[str] = mapped_column(String(255))
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    book: Mapped["Books"] = relationship("Books", back_populates="genre_rows")


target_metadata = Base.metadata

__all__ = [
    "Base",
    "BookGenres",
    "Books",
    "Authors",
    "Persons",
    "UserFriends",
    "Users",
    "target_metadata",
]
