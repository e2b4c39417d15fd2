"""
GraphQL errors returned to clients, each tagged with an ``extensions.code``
"""

from typing import Any

from graphql import GraphQLError


class AuthenticationError(GraphQLError):
    """A protected operation was called without a resolved current user."""

    def __init__(self, message: str = "not authenticated"):
        super().__init__(message, extensions={"code": "UNAUTHENTICATED"})


class UserInputError(GraphQLError):
    """The arguments were rejected; ``invalidArgs`` echoes them back."""

    def __init__(self, message: str, invalid_args: dict[str, Any] | None = None):
        extensions: dict[str, Any] = {"code": "BAD_USER_INPUT"}
        if invalid_args is not None:
            extensions["invalidArgs"] = invalid_args
        super().__init__(message, extensions=extensions)


class InvalidCredentials(UserInputError):
    def __init__(self, message: str = "wrong credentials"):
        super().__init__(message)


class SubscriptionUnavailableError(GraphQLError):
    """No change notifier is attached to the context serving the subscription."""

    def __init__(self, message: str = "subscriptions are not available"):
        super().__init__(message, extensions={"code": "INTERNAL_SERVER_ERROR"})
