"""
Author and Book GraphQL type definitions
"""

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Authors, Books


@strawberry.type
class Author:
    """Author type for GraphQL API."""

    name: str
    born: int | None
    id: strawberry.ID

    @strawberry.field
    async def book_count(self, info: strawberry.Info) -> int:
        """Number of books naming this author; computed on read."""
        from ..resolvers.library import resolve_author_book_count

        return await resolve_author_book_count(self, info)

    @classmethod
    def from_model(cls, author: "Authors") -> "Author":
        return cls(id=strawberry.ID(str(author.id)), name=author.name, born=author.born)


@strawberry.type
class Book:
    """Book type for GraphQL API."""

    title: str
    published: int
    author: str
    genres: list[str]
    id: strawberry.ID

    @classmethod
    def from_model(cls, book: "Books") -> "Book":
        return cls(
            id=strawberry.ID(str(book.id)),
            title=book.title,
            published=book.published,
            author=book.author,
            genres=book.genres,
        )
