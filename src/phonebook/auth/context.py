"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .adapters.base import Identity

if TYPE_CHECKING:
    from ..dbmodels import Users


@dataclass
class AuthContext:
    """Runtime authentication context for a request."""

    identity: Identity | None
    current_user: Users | None
    token: str | None

    @property
    def is_authenticated(self) -> bool:
        """Check if the request resolved to a stored user."""
        return self.current_user is not None

    @classmethod
    def anonymous(cls) -> AuthContext:
        return cls(identity=None, current_user=None, token=None)
