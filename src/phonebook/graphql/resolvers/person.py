from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy.orm import selectinload

from ...database.connection import get_async_session
from ...dbmodels import Persons, Users
from ...logging import get_logger
from ...notifications import PERSON_ADDED, ChangeNotifier
from ...store import EntityStore, StoreValidationError
from ..access_control import require_current_user
from ..errors import AuthenticationError, SubscriptionUnavailableError, UserInputError
from ..loaders import load_friend_of

if TYPE_CHECKING:
    from ..types.person import Person, YesNo
    from ..types.user import User

logger = get_logger(__name__)


def get_notifier(info: strawberry.Info) -> ChangeNotifier | None:
    notifier = info.context.get("notifier")
    if notifier is None:
        logger.warning("Change notifier not found in GraphQL context")
    return notifier


# Query resolvers
async def resolve_person_count(info: strawberry.Info) -> int:
    async with get_async_session() as session:
        return await EntityStore(session, Persons).count()


async def resolve_all_persons(info: strawberry.Info, phone: YesNo | None) -> list[Person]:
    """
    Resolve persons, optionally filtered on whether a phone number is stored.

    YES keeps persons with a phone, NO keeps persons without one.
    """
    from ..types.person import Person, YesNo

    criteria = []
    if phone == YesNo.YES:
        criteria.append(Persons.phone.is_not(None))
    elif phone == YesNo.NO:
        criteria.append(Persons.phone.is_(None))

    async with get_async_session() as session:
        persons = await EntityStore(session, Persons).find(*criteria)

    return [Person.from_model(person) for person in persons]


async def resolve_find_person(info: strawberry.Info, name: str) -> Person | None:
    from ..types.person import Person

    async with get_async_session() as session:
        person = await EntityStore(session, Persons).find_one(Persons.name == name)

    if person is None:
        logger.debug("Person not found", name=name)
        return None
    return Person.from_model(person)


# Field resolvers
async def resolve_person_friend_of(person: Person, info: strawberry.Info) -> list[User]:
    """Reverse lookup of the users listing this person as a friend."""
    from ..types.user import User

    person_id = UUID(str(person.id))
    loaders = info.context.get("loaders")
    if loaders is not None:
        users = await loaders.friend_of_loader.load(person_id)
    else:
        users = (await load_friend_of([person_id]))[0]

    return [User.from_model(user) for user in users]


# Mutation resolvers
async def add_person(
    info: strawberry.Info, name: str, phone: str | None, street: str, city: str
) -> Person:
    """
    Create a person and add it to the current user's friends.

    Both writes share one transaction; the PERSON_ADDED event is published
    only after the commit succeeded.
    """
    from ..types.person import Person

    current_user = require_current_user(info, "addPerson")
    invalid_args = {"name": name, "phone": phone, "street": street, "city": city}

    try:
        async with get_async_session() as session:
            person = await EntityStore(session, Persons).insert(
                Persons(name=name, phone=phone, street=street, city=city)
            )

            users = EntityStore(session, Users)
            user = await users.find_one(
                Users.id == current_user.id, options=[selectinload(Users.friends)]
            )
            if user is None:
                logger.warning("Current user disappeared", user_id=str(current_user.id))
                raise AuthenticationError()

            user.friends.append(person)
            await users.save(user)
            created = Person.from_model(person)
    except StoreValidationError as e:
        logger.info("addPerson rejected", name=name, error=str(e), detail=e.detail)
        raise UserInputError(str(e), invalid_args=invalid_args) from e

    logger.info("Person added", person_id=str(created.id), user_id=str(current_user.id))

    notifier = get_notifier(info)
    if notifier is not None:
        notifier.publish(PERSON_ADDED, created)

    return created


async def edit_number(info: strawberry.Info, name: str, phone: str) -> Person | None:
    """Set a person's phone number; None when no person has that name."""
    from ..types.person import Person

    require_current_user(info, "editNumber")

    try:
        async with get_async_session() as session:
            persons = EntityStore(session, Persons)
            person = await persons.find_one(Persons.name == name)
            if person is None:
                logger.info("editNumber target not found", name=name)
                return None

            person.phone = phone
            await persons.save(person)
            updated = Person.from_model(person)
    except StoreValidationError as e:
        raise UserInputError(str(e), invalid_args={"name": name, "phone": phone}) from e

    return updated


# Subscription resolvers
async def subscribe_person_added(info: strawberry.Info) -> AsyncGenerator[Person, None]:
    """Stream persons created after the subscription started."""
    notifier = get_notifier(info)
    if notifier is None:
        raise SubscriptionUnavailableError()

    subscription = notifier.subscribe(PERSON_ADDED)
    try:
        async for person in subscription:
            yield person
    finally:
        await subscription.aclose()
