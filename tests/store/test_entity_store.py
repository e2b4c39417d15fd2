"""Tests for the generic entity store against a SQLite database."""

import pytest
from sqlalchemy.orm import selectinload

from phonebook.database.connection import get_async_session
from phonebook.dbmodels import Authors, Books, Persons, Users
from phonebook.store import EntityStore, StoreValidationError, validate_document


def make_person(name: str = "Arto Hellas", phone: str | None = "040-123543") -> Persons:
    return Persons(name=name, phone=phone, street="Tapiolankatu 5 A", city="Espoo")


class TestValidateDocument:
    """Field checks run before any write."""

    def test_valid_person_passes(self):
        validate_document(make_person())

    def test_short_name_is_rejected(self):
        with pytest.raises(StoreValidationError) as exc_info:
            validate_document(make_person(name="Al"))

        assert str(exc_info.value) == "Person validation failed"
        assert "name" in exc_info.value.errors

    def test_missing_required_field_is_rejected(self):
        person = Persons(name="Arto Hellas", street="Tapiolankatu 5 A")

        with pytest.raises(StoreValidationError) as exc_info:
            validate_document(person)

        assert "city" in exc_info.value.errors

    def test_optional_phone_may_be_absent(self):
        validate_document(make_person(phone=None))


class TestEntityStore:
    @pytest.mark.asyncio
    async def test_insert_find_and_count(self, database):
        async with get_async_session() as session:
            store = EntityStore(session, Persons)
            await store.insert(make_person())
            await store.insert(make_person(name="Matti Luukkainen", phone=None))

        async with get_async_session() as session:
            store = EntityStore(session, Persons)
            assert await store.count() == 2
            assert await store.count(Persons.phone.is_(None)) == 1

            found = await store.find_one(Persons.name == "Arto Hellas")
            assert found is not None
            assert found.city == "Espoo"

            assert await store.find_one(Persons.name == "Nobody Here") is None
            assert {p.name for p in await store.find()} == {"Arto Hellas", "Matti Luukkainen"}

    @pytest.mark.asyncio
    async def test_duplicate_unique_key_raises_validation_error(self, database):
        async with get_async_session() as session:
            await EntityStore(session, Users).insert(Users(username="mluukkai"))

        with pytest.raises(StoreValidationError) as exc_info:
            async with get_async_session() as session:
                await EntityStore(session, Users).insert(Users(username="mluukkai"))

        assert str(exc_info.value) == "User validation failed"

        async with get_async_session() as session:
            assert await EntityStore(session, Users).count() == 1

    @pytest.mark.asyncio
    async def test_save_persists_changes(self, database):
        async with get_async_session() as session:
            await EntityStore(session, Authors).insert(Authors(name="Robert Martin"))

        async with get_async_session() as session:
            store = EntityStore(session, Authors)
            author = await store.find_one(Authors.name == "Robert Martin")
            author.born = 1952
            await store.save(author)

        async with get_async_session() as session:
            author = await EntityStore(session, Authors).find_one(Authors.name == "Robert Martin")
            assert author.born == 1952

    @pytest.mark.asyncio
    async def test_failed_write_rolls_back_whole_session(self, database):
        with pytest.raises(StoreValidationError):
            async with get_async_session() as session:
                await EntityStore(session, Persons).insert(make_person())
                await EntityStore(session, Persons).insert(make_person())

        async with get_async_session() as session:
            assert await EntityStore(session, Persons).count() == 0

    @pytest.mark.asyncio
    async def test_friends_relationship_round_trip(self, database):
        async with get_async_session() as session:
            persons = EntityStore(session, Persons)
            matti = await persons.insert(make_person(name="Matti Luukkainen"))
            arto = await persons.insert(make_person())
            user = Users(username="mluukkai")
            user.friends = [matti, arto]
            await EntityStore(session, Users).insert(user)

        async with get_async_session() as session:
            user = await EntityStore(session, Users).find_one(
                Users.username == "mluukkai", options=[selectinload(Users.friends)]
            )
            assert [friend.name for friend in user.friends] == ["Arto Hellas", "Matti Luukkainen"]

    @pytest.mark.asyncio
    async def test_book_genres_are_stored_as_a_set(self, database):
        async with get_async_session() as session:
            book = Books(title="Clean Code", published=2008, author="Robert Martin")
            book.genres = ["refactoring", "agile", "refactoring"]
            await EntityStore(session, Books).insert(book)

        async with get_async_session() as session:
            book = await EntityStore(session, Books).find_one(Books.title == "Clean Code")
            assert book.genres == ["refactoring", "agile"]
