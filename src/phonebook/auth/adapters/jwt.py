"""JWT adapter for self-issued session tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import InvalidTokenError

from ...logging import get_logger
from .base import AuthenticationError, Identity

logger = get_logger(__name__)


class JWTAuthAdapter:
    """JWT adapter for self-issued tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "phonebook",
        audience: str = "phonebook-api",
        token_expiry_hours: int | None = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_expiry_hours = token_expiry_hours

    async def issue_token(self, identity: Identity) -> str:
        """Issue a new JWT embedding the username and user id."""
        now = datetime.now(UTC)

        payload = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "sub": identity["id"],
            "username": identity["username"],
            "id": identity["id"],
        }
        if self.token_expiry_hours is not None:
            payload["exp"] = now + timedelta(hours=self.token_expiry_hours)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Identity:
        """Verify a JWT and return the identity it carries."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={"verify_iat": True},
            )
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise AuthenticationError("Invalid token") from e

        user_id = payload.get("id") or payload.get("sub")
        username = payload.get("username")
        if not user_id or not username:
            raise AuthenticationError("Missing identity claims in token")

        return Identity(username=username, id=str(user_id))
