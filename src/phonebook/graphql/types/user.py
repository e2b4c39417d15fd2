"""
User GraphQL type definitions
"""

from typing import TYPE_CHECKING

import strawberry

from .person import Person

if TYPE_CHECKING:
    from ...dbmodels import Users


@strawberry.type
class User:
    """User type for GraphQL API."""

    username: str
    favorite_genre: str | None
    id: strawberry.ID
    friends: list[Person]

    @classmethod
    def from_model(cls, user: "Users") -> "User":
        """Convert a user whose ``friends`` relationship is already loaded."""
        return cls(
            id=strawberry.ID(str(user.id)),
            username=user.username,
            favorite_genre=user.favorite_genre,
            # Appends made in this session are not re-sorted by the relationship order_by
            friends=[
                Person.from_model(friend) for friend in sorted(user.friends, key=lambda p: p.name)
            ],
        )


@strawberry.type
class Token:
    """Signed session token returned by login."""

    value: str
