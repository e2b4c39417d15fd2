"""
Configuration management for the phonebook backend
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./phonebook.db"
    database_pool_size: int = 10
    database_max_overflow: int = 20
    auto_create_schema: bool = True

    # Auth
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "phonebook"
    jwt_audience: str = "phonebook-api"
    token_expiry_hours: int | None = None  # None: tokens carry no exp claim
    # Shared login password checked for every user (demo credential model)
    login_password: str = "secret"

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    sql_echo: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "PHONEBOOK_"
        case_sensitive = False


# Global settings instance
settings = Settings()
