"""Login and token resolution."""

from __future__ import annotations

import secrets

from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Users
from ..logging import get_logger
from ..store import EntityStore
from .adapters.base import AuthenticationError, Identity, InvalidCredentialsError, TokenAdapter

logger = get_logger(__name__)


class AuthService:
    """Verifies username/password pairs and issues or resolves session tokens.

    Every user shares one login password taken from configuration; user
    records carry no credential of their own.
    """

    def __init__(self, adapter: TokenAdapter, login_password: str):
        self.adapter = adapter
        self._login_password = login_password

    async def login(self, session: AsyncSession, username: str, password: str) -> str:
        """Return a signed token for the user, or raise InvalidCredentialsError."""
        user = await EntityStore(session, Users).find_one(Users.username == username)

        password_ok = secrets.compare_digest(password.encode(), self._login_password.encode())
        if user is None or not password_ok:
            logger.info("Login rejected", username=username, user_found=user is not None)
            raise InvalidCredentialsError()

        token = await self.adapter.issue_token(Identity(username=user.username, id=str(user.id)))
        logger.info("Login succeeded", username=username, user_id=str(user.id))
        return token

    async def resolve_identity(self, token: str | None) -> Identity | None:
        """Decode a token; absent or invalid tokens yield None."""
        if not token:
            return None
        try:
            return await self.adapter.verify_token(token)
        except AuthenticationError:
            return None
