"""SQLAlchemy Delivery Exception Repository Implementation"""

from datetime import date
from typing import Optional, List, Tuple
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.delivery_exception_repository import DeliveryExceptionRepository
from src.domain.delivery import Delivery
from src.domain.delivery_exception import DeliveryException, DeliveryExceptionType


class SqlAlchemyDeliveryExceptionRepository(DeliveryExceptionRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, exception: DeliveryException) -> DeliveryException:
        self.session.add(exception)
        await self.session.flush()
        await self.session.refresh(exception)
        return exception

    async def list(
        self,
        delivery_id: Optional[int] = None,
        exception_type: Optional[DeliveryExceptionType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Tuple[DeliveryException, Delivery]], int]:
        filters = []
        if delivery_id is not None:
            filters.append(DeliveryException.delivery_id == delivery_id)
        if exception_type:
            filters.append(DeliveryException.exception_type == exception_type)
        if date_from:
            filters.append(Delivery.scheduled_date >= date_from)
        if date_to:
            filters.append(Delivery.scheduled_date <= date_to)

        count_stmt = (
            select(func.count())
            .select_from(DeliveryException)
            .join(Delivery, Delivery.id == DeliveryException.delivery_id)
            .where(*filters)
        )
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar()

        statement = (
            select(DeliveryException, Delivery)
            .join(Delivery, Delivery.id == DeliveryException.delivery_id)
            .where(*filters)
            .order_by(DeliveryException.reported_at.desc(), DeliveryException.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return [(exception, delivery) for exception, delivery in result.all()], total
