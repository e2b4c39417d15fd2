from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...auth.adapters.base import InvalidCredentialsError
from ...auth.factory import get_auth_service
from ...auth.service import AuthService
from ...database.connection import get_async_session
from ..errors import InvalidCredentials

if TYPE_CHECKING:
    from ..types.user import Token


def get_auth_service_from_info(info: strawberry.Info) -> AuthService:
    return info.context.get("auth_service") or get_auth_service()


async def login(info: strawberry.Info, username: str, password: str) -> Token:
    from ..types.user import Token

    auth_service = get_auth_service_from_info(info)
    try:
        async with get_async_session() as session:
            value = await auth_service.login(session, username, password)
    except InvalidCredentialsError as e:
        raise InvalidCredentials(str(e)) from e

    return Token(value=value)
