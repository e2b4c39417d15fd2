"""Base authentication types shared by the token adapter and the auth service."""

from __future__ import annotations

from typing import Protocol, TypedDict


class Identity(TypedDict):
    """Identity recovered from a verified session token."""

    username: str
    id: str


class TokenAdapter(Protocol):
    """Signs and verifies session tokens."""

    async def issue_token(self, identity: Identity) -> str:
        """
        Sign a token embedding the identity.

        Args:
            identity: Username and user id to embed

        Returns:
            Signed token string
        """
        ...

    async def verify_token(self, token: str) -> Identity:
        """
        Verify a token and return the embedded identity.

        Raises:
            AuthenticationError: If the token is invalid
        """
        ...


class AuthenticationError(Exception):
    """Raised when a token cannot be verified."""

    pass


class InvalidCredentialsError(Exception):
    """Raised when a username/password pair is rejected."""

    def __init__(self, message: str = "wrong credentials"):
        super().__init__(message)
