"""Delivery Domain Entity

One scheduled drop of a product at a customer's address.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, Date, Text, DateTime
from src.domain.base import BaseModel, IdType, id_column, utc_now


class DeliveryStatus(str, Enum):
    """Delivery lifecycle states"""
    SCHEDULED = "scheduled"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    MISSED = "missed"
    CANCELLED = "cancelled"


class Delivery(BaseModel, table=True):
    """
    Delivery - A scheduled product drop

    Domain Rules:
    - amount = product price * quantity (scheduled, then delivered on completion)
    - Only delivered deliveries are billable
    - A delivery is billed on at most one invoice line
    """

    __tablename__ = "deliveries"
    __table_args__ = (
        Index('ix_deliveries_customer_date', 'customer_id', 'scheduled_date'),
        CheckConstraint('scheduled_quantity > 0', name='scheduled_quantity_positive'),
        CheckConstraint('amount >= 0', name='delivery_amount_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique delivery identifier (auto-increment)"
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
    )

    product_id: int = Field(
        sa_column=Column(IdType, ForeignKey("product_catalog.id"), nullable=False),
    )

    subscription_plan_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("subscription_plans.id", ondelete="SET NULL"), nullable=True),
        description="Plan this delivery was generated from, if any"
    )

    scheduled_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    scheduled_quantity: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
    )

    delivered_quantity: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(10, 2), nullable=False, default=0),
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Billable amount (precision: 12,2)"
    )

    delivery_status: DeliveryStatus = Field(
        default=DeliveryStatus.SCHEDULED,
    )

    delivery_notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    delivered_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    delivered_by: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    )

    customer_feedback: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
