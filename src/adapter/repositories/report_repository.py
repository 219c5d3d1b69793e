"""SQLAlchemy Report Repository Implementation

Aggregation queries behind the reporting and dashboard endpoints.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List, Dict
from sqlalchemy import case
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.report_repository import (
    ReportRepository,
    OpenBalanceRow,
    PendingCollectionRow,
    DeliveryTotals,
    DeliveryReportRow,
    TopCustomerRow,
    ProductPopularityRow,
)
from src.domain.area import Area
from src.domain.customer import Customer, CustomerStatus
from src.domain.delivery import Delivery, DeliveryStatus
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.payment import Payment, PaymentStatus
from src.domain.product import Product
from src.domain.subscription import SubscriptionPlan, SubscriptionStatus
from src.domain.user import User


class SqlAlchemyReportRepository(ReportRepository):
    """
    SQLAlchemy implementation of ReportRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_open_balances(
        self, customer_id: Optional[int] = None, area_id: Optional[int] = None
    ) -> List[OpenBalanceRow]:
        """
        Retrieve open invoices joined with their customer

        Args:
            customer_id: Restrict to one customer
            area_id: Restrict to customers of one area

        Returns:
            List of OpenBalanceRow ordered by customer, then due_date
        """
        statement = (
            select(
                Customer.id,
                Customer.customer_code,
                Customer.full_name,
                Customer.area_id,
                Invoice.id,
                Invoice.due_date,
                Invoice.balance_amount,
            )
            .select_from(Invoice)
            .join(Customer, Customer.id == Invoice.customer_id)
            .where(Invoice.balance_amount > 0)
            .where(Invoice.status != InvoiceStatus.CANCELLED)
        )

        if customer_id is not None:
            statement = statement.where(Invoice.customer_id == customer_id)
        if area_id is not None:
            statement = statement.where(Customer.area_id == area_id)

        statement = statement.order_by(Customer.id.asc(), Invoice.due_date.asc(), Invoice.id.asc())

        result = await self.session.execute(statement)
        return [
            OpenBalanceRow(
                customer_id=row[0],
                customer_code=row[1],
                customer_name=row[2],
                area_id=row[3],
                invoice_id=row[4],
                due_date=row[5],
                balance_amount=row[6],
            )
            for row in result.all()
        ]

    async def get_pending_collections(self, area_id: Optional[int] = None) -> List[PendingCollectionRow]:
        total_pending = func.sum(Invoice.balance_amount).label("total_pending")
        statement = (
            select(
                Customer.id,
                Customer.customer_code,
                Customer.full_name,
                Customer.phone,
                Area.name,
                total_pending,
                func.count(Invoice.id),
                func.min(Invoice.due_date),
            )
            .select_from(Invoice)
            .join(Customer, Customer.id == Invoice.customer_id)
            .join(Area, Area.id == Customer.area_id)
            .where(Invoice.balance_amount > 0)
            .where(Invoice.status != InvoiceStatus.CANCELLED)
        )

        if area_id is not None:
            statement = statement.where(Customer.area_id == area_id)

        statement = (
            statement
            .group_by(Customer.id, Customer.customer_code, Customer.full_name, Customer.phone, Area.name)
            .order_by(total_pending.desc())
        )

        result = await self.session.execute(statement)
        return [
            PendingCollectionRow(
                customer_id=row[0],
                customer_code=row[1],
                customer_name=row[2],
                phone=row[3],
                area_name=row[4],
                total_pending=Decimal(row[5] or 0),
                pending_invoices=row[6],
                oldest_due_date=row[7],
            )
            for row in result.all()
        ]

    async def get_delivery_counts(self, on_date: date) -> Dict[str, int]:
        statement = (
            select(Delivery.delivery_status, func.count())
            .where(Delivery.scheduled_date == on_date)
            .group_by(Delivery.delivery_status)
        )
        result = await self.session.execute(statement)
        return {status.value: count for status, count in result.all()}

    async def get_delivered_revenue(self, on_date: date) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(Delivery.amount), 0))
            .where(Delivery.scheduled_date == on_date)
            .where(Delivery.delivery_status == DeliveryStatus.DELIVERED)
        )
        result = await self.session.execute(statement)
        return Decimal(result.scalar_one() or 0)

    async def get_payment_totals(self, on_date: date) -> Dict[str, Decimal]:
        statement = (
            select(func.count(Payment.id), func.coalesce(func.sum(Payment.amount), 0))
            .where(Payment.payment_date == on_date)
            .where(Payment.payment_status == PaymentStatus.COMPLETED)
        )
        result = await self.session.execute(statement)
        count, total = result.one()
        return {"count": count, "total": Decimal(total or 0)}

    async def count_active_customers(self) -> int:
        statement = (
            select(func.count())
            .select_from(Customer)
            .where(Customer.status == CustomerStatus.ACTIVE)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def count_active_areas(self) -> int:
        statement = select(func.count()).select_from(Area).where(Area.is_active.is_(True))
        result = await self.session.execute(statement)
        return result.scalar_one()

    @staticmethod
    def _period(column, date_from: Optional[date], date_to: Optional[date]) -> list:
        filters = []
        if date_from:
            filters.append(column >= date_from)
        if date_to:
            filters.append(column <= date_to)
        return filters

    async def get_delivery_totals(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> DeliveryTotals:
        delivered = Delivery.delivery_status == DeliveryStatus.DELIVERED
        statement = select(
            func.count(Delivery.id),
            func.coalesce(func.sum(case((delivered, 1), else_=0)), 0),
            func.coalesce(func.sum(case((delivered, Delivery.amount), else_=0)), 0),
            func.coalesce(func.sum(case((delivered, Delivery.delivered_quantity), else_=0)), 0),
        ).where(*self._period(Delivery.scheduled_date, date_from, date_to))

        result = await self.session.execute(statement)
        total, completed, revenue, quantity = result.one()
        return DeliveryTotals(
            total_deliveries=total,
            completed_deliveries=completed,
            total_revenue=Decimal(revenue or 0),
            total_quantity_delivered=Decimal(quantity or 0),
        )

    async def get_payment_totals_by_method(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> Dict[str, Decimal]:
        statement = (
            select(Payment.payment_method, func.sum(Payment.amount))
            .where(Payment.payment_status == PaymentStatus.COMPLETED)
            .where(*self._period(Payment.payment_date, date_from, date_to))
            .group_by(Payment.payment_method)
        )
        result = await self.session.execute(statement)
        return {method.value: Decimal(total or 0) for method, total in result.all()}

    async def count_payments(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> int:
        statement = (
            select(func.count())
            .select_from(Payment)
            .where(Payment.payment_status == PaymentStatus.COMPLETED)
            .where(*self._period(Payment.payment_date, date_from, date_to))
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def get_active_subscription_counts(self) -> Dict[str, int]:
        statement = (
            select(SubscriptionPlan.plan_type, func.count())
            .where(SubscriptionPlan.status == SubscriptionStatus.ACTIVE)
            .group_by(SubscriptionPlan.plan_type)
        )
        result = await self.session.execute(statement)
        return {plan_type.value: count for plan_type, count in result.all()}

    async def get_delivery_report(
        self,
        group_by: str = "date",
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        area_id: Optional[int] = None,
    ) -> List[DeliveryReportRow]:
        if group_by == "area":
            group_id, group_name = Area.id, Area.name
        elif group_by == "person":
            group_id, group_name = Delivery.delivered_by, User.full_name
        else:
            group_id = group_name = None

        columns = [
            Delivery.scheduled_date,
            func.count(Delivery.id),
            func.sum(case((Delivery.delivery_status == DeliveryStatus.DELIVERED, 1), else_=0)),
            func.sum(case((Delivery.delivery_status == DeliveryStatus.MISSED, 1), else_=0)),
            func.sum(case((Delivery.delivery_status == DeliveryStatus.CANCELLED, 1), else_=0)),
            func.sum(Delivery.scheduled_quantity),
            func.sum(Delivery.delivered_quantity),
            func.sum(Delivery.amount),
        ]
        if group_id is not None:
            columns += [group_id, group_name]

        statement = (
            select(*columns)
            .select_from(Delivery)
            .join(Customer, Customer.id == Delivery.customer_id)
            .where(*self._period(Delivery.scheduled_date, date_from, date_to))
        )
        if group_by == "area":
            statement = statement.join(Area, Area.id == Customer.area_id)
        elif group_by == "person":
            statement = statement.outerjoin(User, User.id == Delivery.delivered_by)
        if area_id is not None:
            statement = statement.where(Customer.area_id == area_id)

        if group_id is not None:
            statement = (
                statement
                .group_by(Delivery.scheduled_date, group_id, group_name)
                .order_by(Delivery.scheduled_date.desc(), group_name.asc())
            )
        else:
            statement = statement.group_by(Delivery.scheduled_date).order_by(
                Delivery.scheduled_date.desc()
            )

        result = await self.session.execute(statement)
        rows = []
        for row in result.all():
            rows.append(
                DeliveryReportRow(
                    scheduled_date=row[0],
                    group_id=row[8] if group_id is not None else None,
                    group_name=row[9] if group_id is not None else None,
                    total_deliveries=row[1],
                    completed=row[2] or 0,
                    missed=row[3] or 0,
                    cancelled=row[4] or 0,
                    total_quantity_scheduled=Decimal(row[5] or 0),
                    total_quantity_delivered=Decimal(row[6] or 0),
                    total_amount=Decimal(row[7] or 0),
                )
            )
        return rows

    async def get_customer_status_counts(self, area_id: Optional[int] = None) -> Dict[str, int]:
        statement = select(Customer.status, func.count()).group_by(Customer.status)
        if area_id is not None:
            statement = statement.where(Customer.area_id == area_id)
        result = await self.session.execute(statement)
        return {status.value: count for status, count in result.all()}

    async def get_joining_dates(self, area_id: Optional[int] = None) -> List[date]:
        statement = select(Customer.joining_date)
        if area_id is not None:
            statement = statement.where(Customer.area_id == area_id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_top_customers(
        self, area_id: Optional[int] = None, limit: int = 10
    ) -> List[TopCustomerRow]:
        deliveries = (
            select(
                Delivery.customer_id.label("customer_id"),
                func.count(Delivery.id).label("total_deliveries"),
                func.sum(
                    case((Delivery.delivery_status == DeliveryStatus.DELIVERED, Delivery.amount), else_=0)
                ).label("total_revenue"),
            )
            .group_by(Delivery.customer_id)
            .subquery()
        )
        subscriptions = (
            select(
                SubscriptionPlan.customer_id.label("customer_id"),
                func.count(SubscriptionPlan.id).label("active_subscriptions"),
            )
            .where(SubscriptionPlan.status == SubscriptionStatus.ACTIVE)
            .group_by(SubscriptionPlan.customer_id)
            .subquery()
        )
        total_revenue = func.coalesce(deliveries.c.total_revenue, 0)

        statement = (
            select(
                Customer.id,
                Customer.customer_code,
                Customer.full_name,
                Customer.phone,
                Area.name,
                func.coalesce(deliveries.c.total_deliveries, 0),
                total_revenue,
                func.coalesce(subscriptions.c.active_subscriptions, 0),
            )
            .select_from(Customer)
            .join(Area, Area.id == Customer.area_id)
            .outerjoin(deliveries, deliveries.c.customer_id == Customer.id)
            .outerjoin(subscriptions, subscriptions.c.customer_id == Customer.id)
        )
        if area_id is not None:
            statement = statement.where(Customer.area_id == area_id)
        statement = statement.order_by(total_revenue.desc(), Customer.id.asc()).limit(limit)

        result = await self.session.execute(statement)
        return [
            TopCustomerRow(
                customer_id=row[0],
                customer_code=row[1],
                customer_name=row[2],
                phone=row[3],
                area_name=row[4],
                total_deliveries=row[5],
                total_revenue=Decimal(row[6] or 0),
                active_subscriptions=row[7],
            )
            for row in result.all()
        ]

    async def get_product_popularity(self, area_id: Optional[int] = None) -> List[ProductPopularityRow]:
        delivered = Delivery.delivery_status == DeliveryStatus.DELIVERED
        total_revenue = func.sum(case((delivered, Delivery.amount), else_=0)).label("total_revenue")
        statement = (
            select(
                Product.id,
                Product.product_code,
                Product.product_name,
                func.count(Delivery.id),
                func.sum(Delivery.delivered_quantity),
                total_revenue,
            )
            .select_from(Delivery)
            .join(Product, Product.id == Delivery.product_id)
            .join(Customer, Customer.id == Delivery.customer_id)
        )
        if area_id is not None:
            statement = statement.where(Customer.area_id == area_id)
        statement = (
            statement
            .group_by(Product.id, Product.product_code, Product.product_name)
            .order_by(total_revenue.desc(), Product.id.asc())
        )

        result = await self.session.execute(statement)
        return [
            ProductPopularityRow(
                product_id=row[0],
                product_code=row[1],
                product_name=row[2],
                total_orders=row[3],
                total_quantity_sold=Decimal(row[4] or 0),
                total_revenue=Decimal(row[5] or 0),
            )
            for row in result.all()
        ]
