"""SQLAlchemy Payment Repository Implementation

Implements payment persistence using SQLAlchemy async session.
"""

from datetime import date
from typing import Optional, List, Tuple
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment, PaymentMethod, PaymentStatus
from src.domain.base import utc_now


class SqlAlchemyPaymentRepository(PaymentRepository):
    """
    SQLAlchemy implementation of PaymentRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_id(self, payment_id: int) -> Optional[Payment]:
        statement = select(Payment).where(Payment.id == payment_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(
        self,
        customer_id: Optional[int] = None,
        payment_method: Optional[PaymentMethod] = None,
        payment_status: Optional[PaymentStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Payment], int]:
        """
        List payments with optional filters

        Returns:
            Tuple of (payments, total count)
        """
        filters = []
        if customer_id is not None:
            filters.append(Payment.customer_id == customer_id)
        if payment_method:
            filters.append(Payment.payment_method == payment_method)
        if payment_status:
            filters.append(Payment.payment_status == payment_status)
        if date_from:
            filters.append(Payment.payment_date >= date_from)
        if date_to:
            filters.append(Payment.payment_date <= date_to)

        # Get total count
        count_stmt = select(func.count()).select_from(Payment).where(*filters)
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar()

        statement = (
            select(Payment)
            .where(*filters)
            .order_by(Payment.payment_date.desc(), Payment.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, payment: Payment) -> Payment:
        payment.updated_at = utc_now()
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def delete(self, payment: Payment) -> None:
        """
        Delete a payment row

        payment_allocations.payment_id is ON DELETE CASCADE, so the store
        removes the allocations with it.
        """
        await self.session.delete(payment)
        await self.session.flush()

    async def generate_payment_code(self) -> str:
        year = utc_now().year
        prefix = f"PAY-{year}-"

        statement = (
            select(func.max(Payment.payment_code))
            .where(Payment.payment_code.like(f"{prefix}%"))
        )
        result = await self.session.execute(statement)
        max_code = result.scalar_one_or_none()

        sequence = int(max_code.split("-")[-1]) + 1 if max_code else 1
        return f"{prefix}{sequence:06d}"
