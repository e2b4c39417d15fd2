"""Resolve the bearer token of a request to the current user."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import selectinload

from ..database.connection import get_async_session
from ..dbmodels import Users
from ..logging import bind_user_id, get_logger
from ..store import EntityStore
from .context import AuthContext
from .service import AuthService

logger = get_logger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Strip the ``Bearer`` prefix from an Authorization header value."""
    if not authorization:
        return None
    if not authorization.lower().startswith(BEARER_PREFIX):
        logger.debug("Ignoring non-bearer authorization header")
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


async def get_auth_context(authorization: str | None, auth_service: AuthService) -> AuthContext:
    """
    Build the authentication context for one request.

    This function:
    1. Extracts the bearer token from the Authorization header
    2. Verifies it and decodes the identity claims
    3. Reads the full user (with friends) by the decoded id

    A missing, malformed or stale token yields an anonymous context; only
    protected operations treat that as an error.
    """
    token = extract_bearer_token(authorization)
    identity = await auth_service.resolve_identity(token)
    if identity is None:
        if token:
            logger.info("Bearer token rejected")
        return AuthContext.anonymous()

    try:
        user_id = UUID(identity["id"])
    except ValueError:
        logger.warning("Token carries a malformed user id", user_id=identity["id"])
        return AuthContext.anonymous()

    async with get_async_session() as session:
        user = await EntityStore(session, Users).find_one(
            Users.id == user_id, options=[selectinload(Users.friends)]
        )

    if user is None:
        logger.info("Token refers to an unknown user", user_id=identity["id"])
        return AuthContext(identity=identity, current_user=None, token=token)

    bind_user_id(str(user.id))
    return AuthContext(identity=identity, current_user=user, token=token)
