"""Factory for creating the auth service based on configuration."""

from __future__ import annotations

import os

from ..config import settings
from .adapters.jwt import JWTAuthAdapter
from .service import AuthService


def get_auth_service() -> AuthService:
    """Create the auth service from settings, checking the environment first."""
    secret_key = os.getenv("PHONEBOOK_JWT_SECRET") or settings.jwt_secret
    if not secret_key:
        raise ValueError("JWT secret key is required. Set PHONEBOOK_JWT_SECRET.")

    expiry = os.getenv("PHONEBOOK_TOKEN_EXPIRY_HOURS")

    adapter = JWTAuthAdapter(
        secret_key=secret_key,
        algorithm=os.getenv("PHONEBOOK_JWT_ALGORITHM") or settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        token_expiry_hours=int(expiry) if expiry else settings.token_expiry_hours,
    )
    return AuthService(
        adapter=adapter,
        login_password=os.getenv("PHONEBOOK_LOGIN_PASSWORD") or settings.login_password,
    )
