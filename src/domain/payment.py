"""Payment Domain Entity

Money received from a customer.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Date, Text, DateTime
from src.domain.base import BaseModel, IdType, id_column, utc_now


class PaymentMethod(str, Enum):
    """Accepted payment methods"""
    CASH = "cash"
    UPI = "upi"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"


class PaymentStatus(str, Enum):
    """Payment status types"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class Payment(BaseModel, table=True):
    """
    Payment - Amount received from a customer

    Domain Rules:
    - amount > 0 and immutable after creation
    - Sum of allocations never exceeds amount; the difference is unallocated credit
    - Deleting a payment reverses and deletes its allocations in one transaction
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_customer_id', 'customer_id'),
        Index('ix_payments_payment_date', 'payment_date'),
        CheckConstraint('amount > 0', name='payment_amount_positive'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique payment identifier (auto-increment)"
    )

    payment_code: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique payment code (e.g., PAY-2024-000001)"
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id"), nullable=False),
        description="Foreign key to Customer"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Amount received (precision: 12,2)"
    )

    payment_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    payment_method: PaymentMethod = Field(
        description="How the money was received"
    )

    payment_status: PaymentStatus = Field(
        default=PaymentStatus.COMPLETED,
    )

    transaction_reference: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    received_by: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("users.id"), nullable=True),
        description="User who recorded the payment"
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
