"""Identity resolution over the forum's user table."""

from sqlalchemy import select

from src.api.core.exceptions.base import NotFoundError
from src.api.core.messages import MessageCode
from src.core.base import BaseService
from src.database.models import User


class UserDirectory(BaseService):
    async def find_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User:
        """Resolve a username or raise ``NotFoundError``."""
        user = await self.find_by_username(username)
        if not user:
            raise NotFoundError(
                MessageCode.USER_NOT_FOUND, details={"username": username}
            )
        return user

    async def get_by_id(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)
