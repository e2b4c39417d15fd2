"""
Root GraphQL query definitions
"""

import strawberry

from ..types.library import Author, Book
from ..types.person import Person, YesNo
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    # Person queries
    @strawberry.field
    async def person_count(self, info: strawberry.Info) -> int:
        """Number of stored persons."""
        from ..resolvers.person import resolve_person_count

        return await resolve_person_count(info)

    @strawberry.field
    async def all_persons(self, info: strawberry.Info, phone: YesNo | None = None) -> list[Person]:
        """All persons, optionally only those with (YES) or without (NO) a phone."""
        from ..resolvers.person import resolve_all_persons

        return await resolve_all_persons(info, phone)

    @strawberry.field
    async def find_person(self, info: strawberry.Info, name: str) -> Person | None:
        """Get a person by name."""
        from ..resolvers.person import resolve_find_person

        return await resolve_find_person(info, name)

    # Author queries
    @strawberry.field
    async def author_count(self, info: strawberry.Info) -> int:
        from ..resolvers.library import resolve_author_count

        return await resolve_author_count(info)

    @strawberry.field
    async def all_authors(self, info: strawberry.Info) -> list[Author]:
        from ..resolvers.library import resolve_all_authors

        return await resolve_all_authors(info)

    @strawberry.field
    async def find_author(self, info: strawberry.Info, name: str) -> Author | None:
        from ..resolvers.library import resolve_find_author

        return await resolve_find_author(info, name)

    # Book queries
    @strawberry.field
    async def book_count(self, info: strawberry.Info) -> int:
        from ..resolvers.library import resolve_book_count

        return await resolve_book_count(info)

    @strawberry.field
    async def all_books(
        self, info: strawberry.Info, author: str | None = None, genre: str | None = None
    ) -> list[Book]:
        """Books by author and/or genre; both filters intersect."""
        from ..resolvers.library import resolve_all_books

        return await resolve_all_books(info, author, genre)

    @strawberry.field
    async def find_book(self, info: strawberry.Info, title: str) -> Book | None:
        from ..resolvers.library import resolve_find_book

        return await resolve_find_book(info, title)

    # Users
    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.user import resolve_me

        return await resolve_me(info)
