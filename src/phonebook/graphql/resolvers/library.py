from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import strawberry

from ...database.connection import get_async_session
from ...dbmodels import Authors, BookGenres, Books
from ...logging import get_logger
from ...store import EntityStore, StoreValidationError
from ..access_control import require_current_user
from ..errors import UserInputError
from ..loaders import load_book_counts

if TYPE_CHECKING:
    from ..types.library import Author, Book

logger = get_logger(__name__)


# Author queries
async def resolve_author_count(info: strawberry.Info) -> int:
    async with get_async_session() as session:
        return await EntityStore(session, Authors).count()


async def resolve_all_authors(info: strawberry.Info) -> list[Author]:
    from ..types.library import Author

    async with get_async_session() as session:
        authors = await EntityStore(session, Authors).find()

    return [Author.from_model(author) for author in authors]


async def resolve_find_author(info: strawberry.Info, name: str) -> Author | None:
    from ..types.library import Author

    async with get_async_session() as session:
        author = await EntityStore(session, Authors).find_one(Authors.name == name)

    return Author.from_model(author) if author else None


async def resolve_author_book_count(author: Author, info: strawberry.Info) -> int:
    """Count books whose free-text author equals this author's name."""
    loaders = info.context.get("loaders")
    if loaders is not None:
        return await loaders.book_count_loader.load(author.name)
    return (await load_book_counts([author.name]))[0]


# Book queries
async def resolve_book_count(info: strawberry.Info) -> int:
    async with get_async_session() as session:
        return await EntityStore(session, Books).count()


async def resolve_all_books(
    info: strawberry.Info, author: str | None, genre: str | None
) -> list[Book]:
    """
    Resolve books filtered by exact author name and/or genre membership.

    With both filters the result is the intersection of the two.
    """
    from ..types.library import Book

    criteria = []
    if author:
        criteria.append(Books.author == author)
    if genre:
        criteria.append(Books.genre_rows.any(BookGenres.genre == genre))

    async with get_async_session() as session:
        books = await EntityStore(session, Books).find(*criteria)

    return [Book.from_model(book) for book in books]


async def resolve_find_book(info: strawberry.Info, title: str) -> Book | None:
    from ..types.library import Book

    async with get_async_session() as session:
        book = await EntityStore(session, Books).find_one(Books.title == title)

    return Book.from_model(book) if book else None


# Mutations
async def add_book(
    info: strawberry.Info, title: str, author: str, published: int, genres: list[str]
) -> Book:
    """
    Add a book, creating its author on first mention.

    The author link is the free-text name; no author id is stored on the book.
    """
    from ..types.library import Book

    require_current_user(info, "addBook")
    invalid_args = {"title": title, "author": author, "published": published, "genres": genres}

    try:
        async with get_async_session() as session:
            authors = EntityStore(session, Authors)
            if await authors.find_one(Authors.name == author) is None:
                await authors.insert(Authors(id=uuid4(), name=author))
                logger.info("Author created from book", author=author)

            book = Books(id=uuid4(), title=title, published=published, author=author)
            book.genres = genres
            await EntityStore(session, Books).insert(book)
            created = Book.from_model(book)
    except StoreValidationError as e:
        logger.info("addBook rejected", title=title, error=str(e), detail=e.detail)
        raise UserInputError(str(e), invalid_args=invalid_args) from e

    logger.info("Book added", book_id=str(created.id), author=author)
    return created


async def edit_author(info: strawberry.Info, name: str, set_born_to: int) -> Author | None:
    """Set an author's birth year; None when no author has that name."""
    from ..types.library import Author

    require_current_user(info, "editAuthor")

    try:
        async with get_async_session() as session:
            authors = EntityStore(session, Authors)
            author = await authors.find_one(Authors.name == name)
            if author is None:
                return None

            author.born = set_born_to
            await authors.save(author)
            updated = Author.from_model(author)
    except StoreValidationError as e:
        raise UserInputError(str(e), invalid_args={"name": name, "setBornTo": set_born_to}) from e

    return updated
