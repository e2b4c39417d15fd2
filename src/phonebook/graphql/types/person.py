"""
Person GraphQL type definitions
"""

from enum import Enum
from typing import TYPE_CHECKING, Annotated

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Persons
    from .user import User


@strawberry.enum
class YesNo(Enum):
    """Filter on whether a person has a phone number."""

    YES = "YES"
    NO = "NO"


@strawberry.type
class Address:
    street: str
    city: str


@strawberry.type
class Person:
    """Person type for GraphQL API."""

    name: str
    phone: str | None
    id: strawberry.ID
    street: strawberry.Private[str]
    city: strawberry.Private[str]

    @strawberry.field
    def address(self) -> Address:
        """Street and city, stored flat on the person record."""
        return Address(street=self.street, city=self.city)

    @strawberry.field
    async def friend_of(
        self, info: strawberry.Info
    ) -> list[Annotated["User", strawberry.lazy(".user")]]:
        """Users that have this person in their friends."""
        from ..resolvers.person import resolve_person_friend_of

        return await resolve_person_friend_of(self, info)

    @classmethod
    def from_model(cls, person: "Persons") -> "Person":
        return cls(
            id=strawberry.ID(str(person.id)),
            name=person.name,
            phone=person.phone,
            street=person.street,
            city=person.city,
        )
