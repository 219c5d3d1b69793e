"""Builders shared by the use case unit tests"""

from datetime import date, timedelta
from decimal import Decimal
from itertools import count
from src.domain.invoice import Invoice, InvoiceStatus


def make_invoice(
    invoice_id,
    total,
    paid="0.00",
    customer_id=1,
    due_date=None,
    status=InvoiceStatus.SENT,
):
    total = Decimal(total)
    paid = Decimal(paid)
    return Invoice(
        id=invoice_id,
        invoice_number=f"INV-2024-{invoice_id:06d}",
        customer_id=customer_id,
        status=status,
        billing_period_start=date(2024, 2, 1),
        billing_period_end=date(2024, 2, 29),
        due_date=due_date or date.today() + timedelta(days=invoice_id),
        subtotal=total,
        total_amount=total,
        paid_amount=paid,
        balance_amount=total - paid,
    )


def id_assigner(start=1):
    """AsyncMock side effect giving each created entity the next ID"""
    ids = count(start)

    async def assign(entity):
        entity.id = next(ids)
        return entity

    return assign


async def returns_argument(entity):
    return entity
