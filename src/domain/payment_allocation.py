"""Payment Allocation Domain Entity

Portion of one payment applied to one invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, DateTime
from src.domain.base import BaseModel, IdType, id_column, utc_now


class PaymentAllocation(BaseModel, table=True):
    """
    Payment Allocation - Links a payment to an invoice it pays down

    Domain Rules:
    - allocated_amount > 0
    - Sum of allocations per invoice equals invoice.paid_amount
    - Removed with its payment (ON DELETE CASCADE)
    """

    __tablename__ = "payment_allocations"
    __table_args__ = (
        Index('ix_payment_allocations_payment_id', 'payment_id'),
        Index('ix_payment_allocations_invoice_id', 'invoice_id'),
        CheckConstraint('allocated_amount > 0', name='allocated_amount_positive'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique allocation identifier (auto-increment)"
    )

    payment_id: int = Field(
        sa_column=Column(IdType, ForeignKey("payments.id", ondelete="CASCADE"), nullable=False),
    )

    invoice_id: int = Field(
        sa_column=Column(IdType, ForeignKey("invoices.id"), nullable=False),
    )

    allocated_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
