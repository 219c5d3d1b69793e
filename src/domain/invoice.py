"""Invoice Domain Entity

Tracks customer invoices and their running paid / balance amounts.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Date, DateTime
from src.domain.base import BaseModel, IdType, id_column, utc_now


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing invoice for a customer's deliveries

    Domain Rules:
    - invoice_number must be unique
    - total_amount = subtotal + tax_amount - discount_amount, fixed at creation
    - paid_amount only changes through payment allocations and their reversal
    - balance_amount == total_amount - paid_amount at all times
    - Invoices referenced by allocations are never deleted
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_customer_id', 'customer_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_due_date', 'due_date'),
        CheckConstraint('paid_amount >= 0', name='paid_amount_non_negative'),
        CheckConstraint('balance_amount >= 0', name='balance_amount_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique invoice identifier (auto-increment)"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique invoice number (e.g., INV-2024-000001)"
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id"), nullable=False),
        description="Foreign key to Customer"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.SENT,
        description="Invoice status"
    )

    billing_period_start: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    billing_period_end: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    invoice_date: date = Field(
        default_factory=date.today,
        sa_column=Column(Date, nullable=False),
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Payment due date, drives auto-allocation order and aging"
    )

    subtotal: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
    )

    tax_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
    )

    discount_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Total invoice amount (precision: 12,2)"
    )

    paid_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Sum of allocations applied to this invoice"
    )

    balance_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="total_amount - paid_amount"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Last update timestamp"
    )

    def apply_payment(self, amount: Decimal) -> None:
        """Increase paid_amount by an allocated amount"""
        self._set_paid_amount(self.paid_amount + amount)

    def reverse_payment(self, amount: Decimal) -> None:
        """Undo a previous allocation of `amount`"""
        self._set_paid_amount(self.paid_amount - amount)

    def _set_paid_amount(self, paid_amount: Decimal) -> None:
        self.paid_amount = paid_amount
        self.balance_amount = self.total_amount - paid_amount
        self.updated_at = utc_now()

        if self.status in (InvoiceStatus.DRAFT, InvoiceStatus.CANCELLED):
            return
        if self.balance_amount <= 0:
            self.status = InvoiceStatus.PAID
        elif self.paid_amount > 0:
            self.status = InvoiceStatus.PARTIALLY_PAID
        elif self.due_date < date.today():
            self.status = InvoiceStatus.OVERDUE
        else:
            self.status = InvoiceStatus.SENT
