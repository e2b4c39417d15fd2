"""Authentication for the phonebook API."""

from .adapters.base import AuthenticationError, Identity, InvalidCredentialsError
from .context import AuthContext
from .factory import get_auth_service
from .middleware import extract_bearer_token, get_auth_context
from .service import AuthService

__all__ = [
    "AuthContext",
    "AuthService",
    "AuthenticationError",
    "Identity",
    "InvalidCredentialsError",
    "extract_bearer_token",
    "get_auth_context",
    "get_auth_service",
]
