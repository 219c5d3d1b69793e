"""SQLAlchemy Area Repository Implementation"""

from typing import Optional, List
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.area_repository import AreaRepository
from src.domain.area import Area
from src.domain.customer import Customer
from src.domain.base import utc_now


class SqlAlchemyAreaRepository(AreaRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, area: Area) -> Area:
        self.session.add(area)
        await self.session.flush()
        await self.session.refresh(area)
        return area

    async def get_by_id(self, area_id: int) -> Optional[Area]:
        statement = select(Area).where(Area.id == area_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(self, active_only: bool = False) -> List[Area]:
        statement = select(Area)
        if active_only:
            statement = statement.where(Area.is_active.is_(True))
        statement = statement.order_by(Area.name.asc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, area: Area) -> Area:
        area.updated_at = utc_now()
        self.session.add(area)
        await self.session.flush()
        await self.session.refresh(area)
        return area

    async def delete(self, area: Area) -> None:
        await self.session.delete(area)
        await self.session.flush()

    async def count_customers(self, area_id: int) -> int:
        statement = select(func.count()).select_from(Customer).where(Customer.area_id == area_id)
        result = await self.session.execute(statement)
        return result.scalar_one()
