from collections import defaultdict
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload
from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..dbmodels import Books, UserFriends, Users


async def load_friend_of(keys: list[UUID]) -> list[list[Users]]:
    """Batch load, per person id, the users whose friends include that person."""
    async with get_async_session() as session:
        stmt = (
            select(UserFriends.person_id, Users)
            .join(Users, Users.id == UserFriends.user_id)
            .where(UserFriends.person_id.in_(keys))
            .options(selectinload(Users.friends))
            .order_by(Users.username)
        )
        result = await session.execute(stmt)
        users_by_person: defaultdict[UUID, list[Users]] = defaultdict(list)
        for person_id, user in result.all():
            users_by_person[person_id].append(user)
        return [users_by_person.get(key, []) for key in keys]


async def load_book_counts(keys: list[str]) -> list[int]:
    """Batch count books per author name."""
    async with get_async_session() as session:
        stmt = (
            select(Books.author, func.count(Books.id))
            .where(Books.author.in_(keys))
            .group_by(Books.author)
        )
        result = await session.execute(stmt)
        counts = {author: count for author, count in result.all()}
        return [counts.get(key, 0) for key in keys]


class Loaders:
    def __init__(self):
        self.friend_of_loader = DataLoader(load_fn=load_friend_of)
        self.book_count_loader = DataLoader(load_fn=load_book_counts)
