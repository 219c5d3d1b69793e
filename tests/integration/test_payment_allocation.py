"""Integration tests for payment recording and reversal

Tests cover:
- Auto allocation oldest due date first against a real database
- Leftover credit when there is nothing to pay
- Deleting a payment restores invoice balances and removes allocations
- Outstanding report after partial payment
"""

import pytest
from datetime import date
from decimal import Decimal

from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyPaymentAllocationRepository,
    SqlAlchemyReportRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.payments import RecordPayment, DeletePayment, RecordPaymentCommandDTO
from src.app.use_cases.reports import GetCustomerOutstanding
from src.domain.invoice import InvoiceStatus
from src.domain.payment import PaymentMethod
from src.domain.payment_allocation import PaymentAllocation


def record_use_case(session: AsyncSession) -> RecordPayment:
    return RecordPayment(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        allocation_repo=SqlAlchemyPaymentAllocationRepository(session),
    )


def delete_use_case(session: AsyncSession) -> DeletePayment:
    return DeletePayment(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        allocation_repo=SqlAlchemyPaymentAllocationRepository(session),
    )


def payment_command(customer_id, amount):
    return RecordPaymentCommandDTO(
        customer_id=customer_id,
        amount=Decimal(amount),
        payment_date=date.today(),
        payment_method=PaymentMethod.UPI,
    )


async def count_allocations(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(PaymentAllocation))
    return result.scalar()


@pytest.mark.asyncio
class TestPaymentAllocationIntegration:
    """Integration tests with real database"""

    async def test_record_then_delete_restores_balances(
        self, db_session: AsyncSession, customer, make_invoice
    ):
        """
        Given: Invoices of 50 (due first) and 100 for one customer
        When: 120 is paid and the payment is then deleted
        Then: Balances go 0 / 30 after payment and back to 50 / 100 after deletion
        """
        # Arrange
        newer = await make_invoice(customer.id, "100.00", due_in_days=20)
        older = await make_invoice(customer.id, "50.00", due_in_days=5)

        # Act - record
        result = await record_use_case(db_session).execute(payment_command(customer.id, "120.00"))

        # Assert - allocations applied
        assert result.is_ok()
        payment = result.value
        assert payment.payment_code.startswith("PAY-")
        assert [(a.invoice_id, a.allocated_amount) for a in payment.allocations] == [
            (older.id, Decimal("50.00")),
            (newer.id, Decimal("70.00")),
        ]

        invoice_repo = SqlAlchemyInvoiceRepository(db_session)
        stored_older = await invoice_repo.get_by_id(older.id)
        stored_newer = await invoice_repo.get_by_id(newer.id)
        assert stored_older.balance_amount == Decimal("0")
        assert stored_older.status == InvoiceStatus.PAID
        assert stored_newer.paid_amount == Decimal("70.00")
        assert stored_newer.balance_amount == Decimal("30.00")
        assert stored_newer.status == InvoiceStatus.PARTIALLY_PAID
        assert await count_allocations(db_session) == 2

        # Act - delete
        deleted = await delete_use_case(db_session).execute(payment.payment_id)

        # Assert - everything reversed
        assert deleted.is_ok()
        assert deleted.value == 2
        await db_session.refresh(stored_older)
        await db_session.refresh(stored_newer)
        assert stored_older.paid_amount == Decimal("0")
        assert stored_older.balance_amount == Decimal("50.00")
        assert stored_older.status == InvoiceStatus.SENT
        assert stored_newer.balance_amount == Decimal("100.00")
        assert await count_allocations(db_session) == 0
        assert await SqlAlchemyPaymentRepository(db_session).get_by_id(payment.payment_id) is None

    async def test_payment_without_open_invoices_is_credit(
        self, db_session: AsyncSession, customer
    ):
        result = await record_use_case(db_session).execute(payment_command(customer.id, "200.00"))

        assert result.is_ok()
        assert result.value.allocations == []
        assert result.value.unallocated_amount == Decimal("200.00")
        assert await count_allocations(db_session) == 0

    async def test_paid_invoices_are_skipped(self, db_session: AsyncSession, customer, make_invoice):
        settled = await make_invoice(customer.id, "40.00", due_in_days=1)
        open_invoice = await make_invoice(customer.id, "60.00", due_in_days=10)
        await record_use_case(db_session).execute(payment_command(customer.id, "40.00"))

        result = await record_use_case(db_session).execute(payment_command(customer.id, "25.00"))

        assert result.is_ok()
        assert [a.invoice_id for a in result.value.allocations] == [open_invoice.id]
        assert settled.id not in [a.invoice_id for a in result.value.allocations]

    async def test_payment_codes_are_sequential(self, db_session: AsyncSession, customer):
        first = await record_use_case(db_session).execute(payment_command(customer.id, "10.00"))
        second = await record_use_case(db_session).execute(payment_command(customer.id, "10.00"))

        first_seq = int(first.value.payment_code.split("-")[-1])
        second_seq = int(second.value.payment_code.split("-")[-1])
        assert second_seq == first_seq + 1

    async def test_outstanding_after_partial_payment(
        self, db_session: AsyncSession, customer, make_invoice
    ):
        await make_invoice(customer.id, "100.00", due_in_days=5)
        await record_use_case(db_session).execute(payment_command(customer.id, "30.00"))

        result = await GetCustomerOutstanding(
            SqlAlchemyCustomerRepository(db_session), SqlAlchemyReportRepository(db_session)
        ).execute(customer.id)

        assert result.is_ok()
        assert result.value.total_outstanding == Decimal("70.00")
        assert result.value.current_amount == Decimal("70.00")
