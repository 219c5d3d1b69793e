"""SQLAlchemy Payment Allocation Repository Implementation"""

from typing import List, Tuple
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_allocation_repository import PaymentAllocationRepository
from src.domain.invoice import Invoice
from src.domain.payment import Payment
from src.domain.payment_allocation import PaymentAllocation


class SqlAlchemyPaymentAllocationRepository(PaymentAllocationRepository):
    """
    SQLAlchemy implementation of PaymentAllocationRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, allocation: PaymentAllocation) -> PaymentAllocation:
        self.session.add(allocation)
        await self.session.flush()
        await self.session.refresh(allocation)
        return allocation

    async def get_by_payment_id(self, payment_id: int) -> List[PaymentAllocation]:
        statement = (
            select(PaymentAllocation)
            .where(PaymentAllocation.payment_id == payment_id)
            .order_by(PaymentAllocation.id.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_with_invoices_by_payment_id(
        self, payment_id: int
    ) -> List[Tuple[PaymentAllocation, Invoice]]:
        statement = (
            select(PaymentAllocation, Invoice)
            .join(Invoice, Invoice.id == PaymentAllocation.invoice_id)
            .where(PaymentAllocation.payment_id == payment_id)
            .order_by(PaymentAllocation.id.asc())
        )
        result = await self.session.execute(statement)
        return [(allocation, invoice) for allocation, invoice in result.all()]

    async def get_with_payments_by_invoice_id(
        self, invoice_id: int
    ) -> List[Tuple[PaymentAllocation, Payment]]:
        statement = (
            select(PaymentAllocation, Payment)
            .join(Payment, Payment.id == PaymentAllocation.payment_id)
            .where(PaymentAllocation.invoice_id == invoice_id)
            .order_by(Payment.payment_date.desc(), PaymentAllocation.id.desc())
        )
        result = await self.session.execute(statement)
        return [(allocation, payment) for allocation, payment in result.all()]

    async def count_by_invoice_id(self, invoice_id: int) -> int:
        statement = (
            select(func.count())
            .select_from(PaymentAllocation)
            .where(PaymentAllocation.invoice_id == invoice_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one()
