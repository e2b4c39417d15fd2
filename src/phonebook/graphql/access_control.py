"""
Shared access control logic for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

from ..auth.context import AuthContext
from ..logging import get_logger
from .errors import AuthenticationError

if TYPE_CHECKING:
    from ..dbmodels import Users

logger = get_logger(__name__)


def get_auth_context_from_info(info: strawberry.Info) -> AuthContext:
    """
    Extract the auth context built for this request.

    Falls back to an anonymous context when none was attached.
    """
    auth = info.context.get("auth")
    if auth is None:
        logger.warning("Auth context not found in GraphQL context")
        return AuthContext.anonymous()
    return auth


def require_current_user(info: strawberry.Info, operation: str) -> "Users":
    """Return the current user or raise AuthenticationError."""
    current_user = get_auth_context_from_info(info).current_user
    if current_user is None:
        logger.info("Unauthenticated access rejected", operation=operation)
        raise AuthenticationError()
    return current_user
