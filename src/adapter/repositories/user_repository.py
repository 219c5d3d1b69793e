"""SQLAlchemy User Repository Implementation"""

from typing import Optional
from sqlmodel import select, func, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.user_repository import UserRepository
from src.domain.user import User
from src.domain.base import utc_now


class SqlAlchemyUserRepository(UserRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        statement = select(User).where(User.id == user_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def exists_by_email_or_phone(self, email: str, phone: str) -> bool:
        statement = (
            select(func.count())
            .select_from(User)
            .where(or_(User.email == email, User.phone == phone))
        )
        result = await self.session.execute(statement)
        return result.scalar_one() > 0

    async def update(self, user: User) -> User:
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
