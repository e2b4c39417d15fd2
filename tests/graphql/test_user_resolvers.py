"""Tests for user creation, login and friend management."""

import pytest

CREATE_USER = """
mutation CreateUser($username: String!, $favoriteGenre: String) {
  createUser(username: $username, favoriteGenre: $favoriteGenre) {
    id
    username
    favoriteGenre
    friends { name }
  }
}
"""

LOGIN = """
mutation Login($username: String!, $password: String!) {
  login(username: $username, password: $password) { value }
}
"""

ADD_AS_FRIEND = """
mutation AddAsFriend($name: String!) {
  addAsFriend(name: $name) { username friends { name } }
}
"""

ME = "{ me { username favoriteGenre friends { name } } }"


async def add_person(execute, token: str, name: str) -> None:
    result = await execute(
        'mutation($name: String!) { addPerson(name: $name, street: "Malminkaari 10 A", '
        'city: "Helsinki") { id } }',
        {"name": name},
        token=token,
    )
    assert result.errors is None


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_create_user(self, execute):
        result = await execute(CREATE_USER, {"username": "mluukkai", "favoriteGenre": "refactoring"})

        assert result.errors is None
        user = result.data["createUser"]
        assert user["username"] == "mluukkai"
        assert user["favoriteGenre"] == "refactoring"
        assert user["friends"] == []
        assert user["id"]

    @pytest.mark.asyncio
    async def test_duplicate_username_is_bad_user_input(self, execute):
        await execute(CREATE_USER, {"username": "mluukkai"})

        result = await execute(CREATE_USER, {"username": "mluukkai"})

        error = result.errors[0]
        assert error.message == "User validation failed"
        assert error.extensions["code"] == "BAD_USER_INPUT"
        assert error.extensions["invalidArgs"] == {"username": "mluukkai", "favoriteGenre": None}

    @pytest.mark.asyncio
    async def test_short_username_is_rejected(self, execute):
        result = await execute(CREATE_USER, {"username": "ml"})

        assert result.errors[0].extensions["code"] == "BAD_USER_INPUT"


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_returns_token_usable_for_me(self, execute):
        await execute(CREATE_USER, {"username": "mluukkai", "favoriteGenre": "refactoring"})

        result = await execute(LOGIN, {"username": "mluukkai", "password": "secret"})

        assert result.errors is None
        token = result.data["login"]["value"]
        me = await execute(ME, token=token)
        assert me.data["me"] == {
            "username": "mluukkai",
            "favoriteGenre": "refactoring",
            "friends": [],
        }

    @pytest.mark.asyncio
    async def test_wrong_password(self, execute):
        await execute(CREATE_USER, {"username": "mluukkai"})

        result = await execute(LOGIN, {"username": "mluukkai", "password": "hunter2"})

        assert result.data is None
        assert result.errors[0].message == "wrong credentials"
        assert result.errors[0].extensions["code"] == "BAD_USER_INPUT"

    @pytest.mark.asyncio
    async def test_unknown_user(self, execute):
        result = await execute(LOGIN, {"username": "nobody", "password": "secret"})

        assert result.errors[0].message == "wrong credentials"


class TestMe:
    @pytest.mark.asyncio
    async def test_anonymous_me_is_null(self, execute):
        result = await execute(ME)

        assert result.errors is None
        assert result.data["me"] is None

    @pytest.mark.asyncio
    async def test_invalid_token_is_treated_as_anonymous(self, execute):
        result = await execute(ME, token="not-a-token")

        assert result.errors is None
        assert result.data["me"] is None


class TestAddAsFriend:
    @pytest.mark.asyncio
    async def test_add_existing_person_as_friend(self, execute, login_as):
        owner = await login_as("mluukkai")
        await add_person(execute, owner, "Matti Luukkainen")
        other = await login_as("hellas")

        result = await execute(ADD_AS_FRIEND, {"name": "Matti Luukkainen"}, token=other)

        assert result.errors is None
        assert result.data["addAsFriend"] == {
            "username": "hellas",
            "friends": [{"name": "Matti Luukkainen"}],
        }

        found = await execute('{ findPerson(name: "Matti Luukkainen") { friendOf { username } } }')
        assert found.data["findPerson"]["friendOf"] == [
            {"username": "hellas"},
            {"username": "mluukkai"},
        ]

    @pytest.mark.asyncio
    async def test_adding_twice_keeps_one_entry(self, execute, login_as):
        token = await login_as("mluukkai")
        await add_person(execute, token, "Matti Luukkainen")

        result = await execute(ADD_AS_FRIEND, {"name": "Matti Luukkainen"}, token=token)

        assert result.errors is None
        assert result.data["addAsFriend"]["friends"] == [{"name": "Matti Luukkainen"}]

    @pytest.mark.asyncio
    async def test_friends_are_listed_by_name(self, execute, login_as):
        other = await login_as("hellas")
        await add_person(execute, other, "Juha Tauriainen")
        token = await login_as("mluukkai")
        await add_person(execute, token, "Matti Luukkainen")
        await add_person(execute, token, "Arto Hellas")

        added = await execute(ADD_AS_FRIEND, {"name": "Juha Tauriainen"}, token=token)
        me = await execute(ME, token=token)

        expected = [{"name": "Arto Hellas"}, {"name": "Juha Tauriainen"}, {"name": "Matti Luukkainen"}]
        assert added.data["addAsFriend"]["friends"] == expected
        assert me.data["me"]["friends"] == expected

    @pytest.mark.asyncio
    async def test_unknown_person_returns_null(self, execute, login_as):
        token = await login_as("mluukkai")

        result = await execute(ADD_AS_FRIEND, {"name": "Nobody Here"}, token=token)

        assert result.errors is None
        assert result.data["addAsFriend"] is None

    @pytest.mark.asyncio
    async def test_requires_authentication(self, execute, login_as):
        token = await login_as("mluukkai")
        await add_person(execute, token, "Matti Luukkainen")

        result = await execute(ADD_AS_FRIEND, {"name": "Matti Luukkainen"})

        assert result.errors[0].extensions["code"] == "UNAUTHENTICATED"
