"""Credential store — persistence for user records."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.db.models import User


class UserRepository:
    """Reads and inserts rows in the users table.

    Username uniqueness is enforced by the table's unique index, so add()
    surfaces duplicates as sqlalchemy.exc.IntegrityError on flush.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.username == username)
        )
        return result.scalars().first()

    async def add(self, username: str, password_hash: str, salt: str) -> User:
        user = User(username=username, password_hash=password_hash, salt=salt)
        self.db.add(user)
        await self.db.flush()  # get auto-generated ID, raise on duplicates
        return user
