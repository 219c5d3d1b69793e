"""Delivery Exception Domain Entity

Problems reported by delivery staff on a drop.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Text
from src.domain.base import BaseModel, IdType, id_column, utc_now


class DeliveryExceptionType(str, Enum):
    CUSTOMER_UNAVAILABLE = "customer_unavailable"
    WRONG_ADDRESS = "wrong_address"
    QUANTITY_ISSUE = "quantity_issue"
    PAYMENT_ISSUE = "payment_issue"
    OTHER = "other"


class DeliveryException(BaseModel, table=True):
    """DeliveryException - A problem noted against one delivery"""

    __tablename__ = "delivery_exceptions"
    __table_args__ = (
        Index('ix_delivery_exceptions_delivery_id', 'delivery_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
    )

    delivery_id: int = Field(
        sa_column=Column(IdType, ForeignKey("deliveries.id", ondelete="CASCADE"), nullable=False),
    )

    exception_type: DeliveryExceptionType = Field(
        description="Kind of problem"
    )

    exception_notes: str = Field(
        sa_column=Column(Text, nullable=False),
    )

    reported_by: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("users.id"), nullable=True),
    )

    reported_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
