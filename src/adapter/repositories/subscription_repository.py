"""SQLAlchemy Subscription Repository Implementation

Implements subscription persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple, Dict
from sqlalchemy import update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.customer import Customer
from src.domain.subscription import SubscriptionPlan, SubscriptionSchedule, SubscriptionStatus
from src.domain.base import utc_now


class SqlAlchemySubscriptionRepository(SubscriptionRepository):
    """
    SQLAlchemy implementation of SubscriptionRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, plan: SubscriptionPlan) -> SubscriptionPlan:
        self.session.add(plan)
        await self.session.flush()
        await self.session.refresh(plan)
        return plan

    async def get_by_id(self, plan_id: int) -> Optional[SubscriptionPlan]:
        statement = select(SubscriptionPlan).where(SubscriptionPlan.id == plan_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(
        self,
        customer_id: Optional[int] = None,
        product_id: Optional[int] = None,
        status: Optional[SubscriptionStatus] = None,
        area_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[SubscriptionPlan], int]:
        filters = []
        if customer_id is not None:
            filters.append(SubscriptionPlan.customer_id == customer_id)
        if product_id is not None:
            filters.append(SubscriptionPlan.product_id == product_id)
        if status:
            filters.append(SubscriptionPlan.status == status)

        count_stmt = select(func.count()).select_from(SubscriptionPlan)
        statement = select(SubscriptionPlan)
        if area_id is not None:
            count_stmt = count_stmt.join(Customer, Customer.id == SubscriptionPlan.customer_id)
            statement = statement.join(Customer, Customer.id == SubscriptionPlan.customer_id)
            filters.append(Customer.area_id == area_id)

        count_result = await self.session.execute(count_stmt.where(*filters))
        total = count_result.scalar()

        statement = (
            statement
            .where(*filters)
            .order_by(SubscriptionPlan.created_at.desc(), SubscriptionPlan.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, plan: SubscriptionPlan) -> SubscriptionPlan:
        plan.updated_at = utc_now()
        self.session.add(plan)
        await self.session.flush()
        await self.session.refresh(plan)
        return plan

    async def delete(self, plan: SubscriptionPlan) -> None:
        """
        Delete a plan row

        subscription_schedule rows cascade; deliveries keep their history
        with subscription_plan_id set to NULL.
        """
        await self.session.delete(plan)
        await self.session.flush()

    async def add_schedule(self, schedule: SubscriptionSchedule) -> SubscriptionSchedule:
        self.session.add(schedule)
        await self.session.flush()
        await self.session.refresh(schedule)
        return schedule

    async def get_active_schedules(self, plan_ids: List[int]) -> Dict[int, List[SubscriptionSchedule]]:
        schedules: Dict[int, List[SubscriptionSchedule]] = {plan_id: [] for plan_id in plan_ids}
        if not plan_ids:
            return schedules

        statement = (
            select(SubscriptionSchedule)
            .where(SubscriptionSchedule.subscription_plan_id.in_(plan_ids))
            .where(SubscriptionSchedule.is_active.is_(True))
            .order_by(
                SubscriptionSchedule.subscription_plan_id.asc(),
                SubscriptionSchedule.day_of_week.asc(),
                SubscriptionSchedule.day_of_month.asc(),
                SubscriptionSchedule.id.asc(),
            )
        )
        result = await self.session.execute(statement)
        for schedule in result.scalars().all():
            schedules[schedule.subscription_plan_id].append(schedule)
        return schedules

    async def deactivate_schedules(self, plan_id: int) -> int:
        statement = (
            update(SubscriptionSchedule)
            .where(SubscriptionSchedule.subscription_plan_id == plan_id)
            .where(SubscriptionSchedule.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(statement)
        return result.rowcount
