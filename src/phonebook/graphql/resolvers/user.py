from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry
from sqlalchemy.orm import selectinload

from ...database.connection import get_async_session
from ...dbmodels import Persons, Users
from ...logging import get_logger
from ...store import EntityStore, StoreValidationError
from ..access_control import get_auth_context_from_info, require_current_user
from ..errors import AuthenticationError, UserInputError

if TYPE_CHECKING:
    from ..types.user import User

logger = get_logger(__name__)


async def resolve_me(info: strawberry.Info) -> User | None:
    """The current user as read when the request context was built."""
    from ..types.user import User

    current_user = get_auth_context_from_info(info).current_user
    if current_user is None:
        return None
    return User.from_model(current_user)


async def create_user(info: strawberry.Info, username: str, favorite_genre: str | None) -> User:
    from ..types.user import User

    try:
        async with get_async_session() as session:
            user = Users(username=username, favorite_genre=favorite_genre)
            # Fresh user: no friends yet, so no lazy load is needed
            user.friends = []
            await EntityStore(session, Users).insert(user)
            created = User.from_model(user)
    except StoreValidationError as e:
        logger.info("createUser rejected", username=username, error=str(e), detail=e.detail)
        raise UserInputError(
            str(e), invalid_args={"username": username, "favoriteGenre": favorite_genre}
        ) from e

    logger.info("User created", user_id=str(created.id), username=username)
    return created


async def add_as_friend(info: strawberry.Info, name: str) -> User | None:
    """
    Add an existing person to the current user's friends.

    Re-adding a friend leaves the set unchanged; the user is saved either way.
    Returns None when no person has that name.
    """
    from ..types.user import User

    current_user = require_current_user(info, "addAsFriend")

    try:
        async with get_async_session() as session:
            person = await EntityStore(session, Persons).find_one(Persons.name == name)
            if person is None:
                logger.info("addAsFriend target not found", name=name)
                return None

            users = EntityStore(session, Users)
            user = await users.find_one(
                Users.id == current_user.id, options=[selectinload(Users.friends)]
            )
            if user is None:
                raise AuthenticationError()

            if all(friend.id != person.id for friend in user.friends):
                user.friends.append(person)
            await users.save(user)
            updated = User.from_model(user)
    except StoreValidationError as e:
        raise UserInputError(str(e), invalid_args={"name": name}) from e

    return updated
