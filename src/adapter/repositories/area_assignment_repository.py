"""SQLAlchemy Area Assignment Repository Implementation"""

from typing import Optional, List, Tuple
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.area_assignment_repository import AreaAssignmentRepository
from src.domain.area_assignment import AreaAssignment
from src.domain.user import User


class SqlAlchemyAreaAssignmentRepository(AreaAssignmentRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, assignment: AreaAssignment) -> AreaAssignment:
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment

    async def get_by_id(self, assignment_id: int) -> Optional[AreaAssignment]:
        statement = select(AreaAssignment).where(AreaAssignment.id == assignment_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_active(self, area_id: int, user_id: int) -> Optional[AreaAssignment]:
        statement = (
            select(AreaAssignment)
            .where(AreaAssignment.area_id == area_id)
            .where(AreaAssignment.user_id == user_id)
            .where(AreaAssignment.is_active.is_(True))
        )
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def list_active_for_area(self, area_id: int) -> List[Tuple[AreaAssignment, User]]:
        statement = (
            select(AreaAssignment, User)
            .join(User, User.id == AreaAssignment.user_id)
            .where(AreaAssignment.area_id == area_id)
            .where(AreaAssignment.is_active.is_(True))
            .order_by(User.full_name.asc())
        )
        result = await self.session.execute(statement)
        return [(assignment, user) for assignment, user in result.all()]

    async def update(self, assignment: AreaAssignment) -> AreaAssignment:
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment
