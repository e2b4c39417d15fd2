"""End-to-end tests through the FastAPI application."""

import httpx
import pytest

from phonebook.api.app import create_app


@pytest.fixture
def app(database):
    return create_app()


@pytest.fixture
def client(app):
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


async def post_graphql(client, query, variables=None, token=None):
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    response = await client.post(
        "/graphql", json={"query": query, "variables": variables or {}}, headers=headers
    )
    assert response.status_code == 200
    return response.json()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        async with client:
            response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "ok"

    @pytest.mark.asyncio
    async def test_request_id_header(self, client):
        async with client:
            generated = await client.get("/health")
            echoed = await client.get("/health", headers={"X-Request-ID": "req-123"})

        assert generated.headers["X-Request-ID"]
        assert echoed.headers["X-Request-ID"] == "req-123"


class TestCreateApp:
    def test_requires_jwt_secret(self, monkeypatch):
        monkeypatch.delenv("PHONEBOOK_JWT_SECRET", raising=False)
        monkeypatch.setattr("phonebook.auth.factory.settings.jwt_secret", None)

        with pytest.raises(ValueError):
            create_app()


class TestGraphQLOverHTTP:
    @pytest.mark.asyncio
    async def test_user_flow_with_bearer_token(self, client):
        async with client:
            created = await post_graphql(
                client, 'mutation { createUser(username: "mluukkai") { username } }'
            )
            assert created["data"]["createUser"] == {"username": "mluukkai"}

            login = await post_graphql(
                client, 'mutation { login(username: "mluukkai", password: "secret") { value } }'
            )
            token = login["data"]["login"]["value"]

            added = await post_graphql(
                client,
                'mutation { addPerson(name: "Arto Hellas", street: "Tapiolankatu 5 A", '
                'city: "Espoo") { name phone } }',
                token=token,
            )
            assert added["data"]["addPerson"] == {"name": "Arto Hellas", "phone": None}

            me = await post_graphql(client, "{ me { username friends { name } } }", token=token)
            assert me["data"]["me"] == {
                "username": "mluukkai",
                "friends": [{"name": "Arto Hellas"}],
            }

    @pytest.mark.asyncio
    async def test_errors_carry_codes(self, client):
        async with client:
            denied = await post_graphql(
                client,
                'mutation { editAuthor(name: "Robert Martin", setBornTo: 1952) { name } }',
            )
            wrong = await post_graphql(
                client, 'mutation { login(username: "nobody", password: "secret") { value } }'
            )

        assert denied["errors"][0]["extensions"]["code"] == "UNAUTHENTICATED"
        assert wrong["errors"][0]["message"] == "wrong credentials"
        assert wrong["errors"][0]["extensions"]["code"] == "BAD_USER_INPUT"

    @pytest.mark.asyncio
    async def test_malformed_authorization_header_is_anonymous(self, client):
        async with client:
            response = await client.post(
                "/graphql",
                json={"query": "{ me { username } }"},
                headers={"Authorization": "Basic dXNlcjpwYXNz"},
            )

        assert response.json() == {"data": {"me": None}}
