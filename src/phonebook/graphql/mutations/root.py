"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.library import Author, Book
from ..types.person import Person
from ..types.user import Token, User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Person mutations
    @strawberry.mutation(name="addPerson")
    async def add_person(
        self,
        info: strawberry.Info,
        name: str,
        street: str,
        city: str,
        phone: str | None = None,
    ) -> Person:
        """Create a person and add it to the current user's friends."""
        from ..resolvers.person import add_person

        return await add_person(info, name=name, phone=phone, street=street, city=city)

    @strawberry.mutation(name="editNumber")
    async def edit_number(self, info: strawberry.Info, name: str, phone: str) -> Person | None:
        """Change a person's phone number."""
        from ..resolvers.person import edit_number

        return await edit_number(info, name=name, phone=phone)

    # User mutations
    @strawberry.mutation(name="createUser")
    async def create_user(
        self, info: strawberry.Info, username: str, favorite_genre: str | None = None
    ) -> User:
        from ..resolvers.user import create_user

        return await create_user(info, username=username, favorite_genre=favorite_genre)

    @strawberry.mutation
    async def login(self, info: strawberry.Info, username: str, password: str) -> Token:
        from ..resolvers.auth import login

        return await login(info, username=username, password=password)

    @strawberry.mutation(name="addAsFriend")
    async def add_as_friend(self, info: strawberry.Info, name: str) -> User | None:
        """Add an existing person to the current user's friends."""
        from ..resolvers.user import add_as_friend

        return await add_as_friend(info, name=name)

    # Library mutations
    @strawberry.mutation(name="addBook")
    async def add_book(
        self,
        info: strawberry.Info,
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> Book:
        from ..resolvers.library import add_book

        return await add_book(
            info, title=title, author=author, published=published, genres=genres
        )

    @strawberry.mutation(name="editAuthor")
    async def edit_author(
        self, info: strawberry.Info, name: str, set_born_to: int
    ) -> Author | None:
        from ..resolvers.library import edit_author

        return await edit_author(info, name=name, set_born_to=set_born_to)
