"""
Root GraphQL subscription definitions
"""

from collections.abc import AsyncGenerator

import strawberry

from ..types.person import Person


@strawberry.type
class Subscription:
    """Root GraphQL subscription type."""

    @strawberry.subscription
    async def person_added(self, info: strawberry.Info) -> AsyncGenerator[Person, None]:
        """Persons created after the subscription started."""
        from ..resolvers.person import subscribe_person_added

        stream = subscribe_person_added(info)
        try:
            async for person in stream:
                yield person
        finally:
            await stream.aclose()
