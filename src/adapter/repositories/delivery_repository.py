"""SQLAlchemy Delivery Repository Implementation

Implements delivery persistence using SQLAlchemy async session.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List, Tuple, Dict
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.delivery_repository import DeliveryRepository, RouteStop, CalendarDay
from src.domain.area import Area
from src.domain.customer import Customer
from src.domain.delivery import Delivery, DeliveryStatus
from src.domain.invoice_line import InvoiceLineItem
from src.domain.product import Product
from src.domain.base import utc_now


class SqlAlchemyDeliveryRepository(DeliveryRepository):
    """
    SQLAlchemy implementation of DeliveryRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, delivery: Delivery) -> Delivery:
        self.session.add(delivery)
        await self.session.flush()
        await self.session.refresh(delivery)
        return delivery

    async def get_by_id(self, delivery_id: int) -> Optional[Delivery]:
        statement = select(Delivery).where(Delivery.id == delivery_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update(self, delivery: Delivery) -> Delivery:
        delivery.updated_at = utc_now()
        self.session.add(delivery)
        await self.session.flush()
        await self.session.refresh(delivery)
        return delivery

    async def list(
        self,
        customer_id: Optional[int] = None,
        delivery_status: Optional[DeliveryStatus] = None,
        area_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Delivery], int]:
        filters = []
        if customer_id is not None:
            filters.append(Delivery.customer_id == customer_id)
        if delivery_status:
            filters.append(Delivery.delivery_status == delivery_status)
        if area_id is not None:
            filters.append(Delivery.customer_id.in_(
                select(Customer.id).where(Customer.area_id == area_id)
            ))
        if date_from:
            filters.append(Delivery.scheduled_date >= date_from)
        if date_to:
            filters.append(Delivery.scheduled_date <= date_to)

        count_stmt = select(func.count()).select_from(Delivery).where(*filters)
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar()

        statement = (
            select(Delivery)
            .where(*filters)
            .order_by(Delivery.scheduled_date.desc(), Delivery.id.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def get_uninvoiced_delivered(
        self, customer_id: int, period_start: date, period_end: date
    ) -> List[Tuple[Delivery, Product]]:
        """
        Retrieve billable deliveries for a customer and period

        A delivery is billable when it is delivered and no invoice line
        references it yet.
        """
        invoiced = select(InvoiceLineItem.delivery_id).where(
            InvoiceLineItem.delivery_id.is_not(None)
        )
        statement = (
            select(Delivery, Product)
            .join(Product, Product.id == Delivery.product_id)
            .where(Delivery.customer_id == customer_id)
            .where(Delivery.scheduled_date >= period_start)
            .where(Delivery.scheduled_date <= period_end)
            .where(Delivery.delivery_status == DeliveryStatus.DELIVERED)
            .where(Delivery.id.not_in(invoiced))
            .order_by(Delivery.scheduled_date.asc(), Delivery.id.asc())
        )
        result = await self.session.execute(statement)
        return [(delivery, product) for delivery, product in result.all()]

    async def delete(self, delivery: Delivery) -> None:
        """
        Delete a delivery row

        delivery_exceptions.delivery_id is ON DELETE CASCADE.
        """
        await self.session.delete(delivery)
        await self.session.flush()

    async def is_invoiced(self, delivery_id: int) -> bool:
        statement = (
            select(func.count())
            .select_from(InvoiceLineItem)
            .where(InvoiceLineItem.delivery_id == delivery_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one() > 0

    async def list_route(
        self,
        on_date: date,
        area_id: Optional[int] = None,
        delivery_status: Optional[DeliveryStatus] = None,
    ) -> List[RouteStop]:
        statement = (
            select(Delivery, Customer, Product, Area.name)
            .select_from(Delivery)
            .join(Customer, Customer.id == Delivery.customer_id)
            .join(Product, Product.id == Delivery.product_id)
            .join(Area, Area.id == Customer.area_id)
            .where(Delivery.scheduled_date == on_date)
        )
        if area_id is not None:
            statement = statement.where(Customer.area_id == area_id)
        if delivery_status:
            statement = statement.where(Delivery.delivery_status == delivery_status)

        statement = statement.order_by(Area.name.asc(), Customer.full_name.asc(), Delivery.id.asc())
        result = await self.session.execute(statement)
        return [
            RouteStop(delivery=delivery, customer=customer, product=product, area_name=area_name)
            for delivery, customer, product, area_name in result.all()
        ]

    async def get_calendar(
        self, start_date: date, end_date: date, area_id: Optional[int] = None
    ) -> List[CalendarDay]:
        statement = (
            select(
                Delivery.scheduled_date,
                Delivery.delivery_status,
                func.count(),
                func.sum(Delivery.scheduled_quantity),
                func.sum(Delivery.amount),
            )
            .select_from(Delivery)
            .where(Delivery.scheduled_date >= start_date)
            .where(Delivery.scheduled_date <= end_date)
        )
        if area_id is not None:
            statement = (
                statement
                .join(Customer, Customer.id == Delivery.customer_id)
                .where(Customer.area_id == area_id)
            )
        statement = statement.group_by(Delivery.scheduled_date, Delivery.delivery_status)

        result = await self.session.execute(statement)
        days: Dict[date, CalendarDay] = {}
        for scheduled_date, status, count, quantity, amount in result.all():
            day = days.setdefault(
                scheduled_date,
                CalendarDay(
                    scheduled_date=scheduled_date,
                    status_counts={},
                    total_quantity=Decimal("0"),
                    total_amount=Decimal("0"),
                ),
            )
            day.status_counts[status.value] = count
            day.total_quantity += Decimal(quantity or 0)
            day.total_amount += Decimal(amount or 0)
        return [days[key] for key in sorted(days)]
