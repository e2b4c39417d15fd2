"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from phonebook.auth.adapters.jwt import JWTAuthAdapter
from phonebook.auth.service import AuthService
from phonebook.notifications import ChangeNotifier

TEST_JWT_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    os.environ["PHONEBOOK_JWT_SECRET"] = TEST_JWT_SECRET
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'phonebook-test.db'}"


@pytest_asyncio.fixture
async def database(database_url: str) -> AsyncGenerator[str, None]:
    """Point the shared engine at a fresh SQLite database with all tables created."""
    from phonebook.database.connection import (
        create_schema,
        dispose_database,
        init_database,
        reset_database,
    )

    reset_database()
    init_database(database_url, force_reinit=True)
    await create_schema()
    yield database_url
    await dispose_database()


@pytest.fixture
def auth_service() -> AuthService:
    return AuthService(
        adapter=JWTAuthAdapter(secret_key=TEST_JWT_SECRET),
        login_password="secret",
    )


@pytest.fixture
def notifier() -> ChangeNotifier:
    return ChangeNotifier()


GraphQLExecutor = Callable[..., Awaitable[Any]]


@pytest.fixture
def execute(database: str, auth_service: AuthService, notifier: ChangeNotifier) -> GraphQLExecutor:
    """Run a GraphQL document against the schema with a freshly built request context."""
    from phonebook.graphql.schema import build_context, schema

    async def _execute(
        query: str, variables: dict[str, Any] | None = None, token: str | None = None
    ) -> Any:
        authorization = f"Bearer {token}" if token else None
        context = await build_context(authorization, auth_service, notifier)
        return await schema.execute(query, variable_values=variables, context_value=context)

    return _execute


@pytest.fixture
def login_as(execute: GraphQLExecutor) -> Callable[[str], Awaitable[str]]:
    """Create a user (if needed) and return a token for it."""

    async def _login_as(username: str) -> str:
        await execute(
            "mutation($u: String!) { createUser(username: $u) { id } }", {"u": username}
        )
        result = await execute(
            'mutation($u: String!) { login(username: $u, password: "secret") { value } }',
            {"u": username},
        )
        assert result.errors is None
        return result.data["login"]["value"]

    return _login_as


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
