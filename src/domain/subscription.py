"""Subscription Domain Entities

Recurring delivery plans: what a customer receives and on which days.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, IdType, id_column, utc_now


class SubscriptionPlanType(str, Enum):
    """How the schedule of a plan is expressed"""
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class SubscriptionStatus(str, Enum):
    """Subscription status types"""
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


STATUS_TRANSITIONS = {
    SubscriptionStatus.ACTIVE: {
        SubscriptionStatus.PAUSED,
        SubscriptionStatus.CANCELLED,
        SubscriptionStatus.COMPLETED,
    },
    SubscriptionStatus.PAUSED: {
        SubscriptionStatus.ACTIVE,
        SubscriptionStatus.CANCELLED,
    },
    SubscriptionStatus.CANCELLED: set(),
    SubscriptionStatus.COMPLETED: set(),
}


def schedule_fits_plan(
    plan_type: SubscriptionPlanType,
    day_of_week: Optional[int],
    day_of_month: Optional[int],
) -> bool:
    """
    Check that a schedule row has the day fields its plan type expects

    daily: neither day field; weekly: day_of_week only;
    custom: exactly one of the two.
    """
    if plan_type == SubscriptionPlanType.DAILY:
        return day_of_week is None and day_of_month is None
    if plan_type == SubscriptionPlanType.WEEKLY:
        return day_of_week is not None and day_of_month is None
    return (day_of_week is None) != (day_of_month is None)


class SubscriptionPlan(BaseModel, table=True):
    """
    SubscriptionPlan - A customer's standing order for one product

    Domain Rules:
    - Status transitions: active <-> paused, active/paused -> cancelled,
      active -> completed; cancelled and completed are final
    - end_date is optional (None = ongoing) and never before start_date
    - Quantities per day live in SubscriptionSchedule rows
    """

    __tablename__ = "subscription_plans"
    __table_args__ = (
        Index('ix_subscription_plans_customer_id', 'customer_id'),
        Index('ix_subscription_plans_status', 'status'),
        CheckConstraint('end_date IS NULL OR end_date >= start_date', name='subscription_dates_ordered'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique subscription identifier (auto-increment)"
    )

    customer_id: int = Field(
        sa_column=Column(IdType, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
    )

    product_id: int = Field(
        sa_column=Column(IdType, ForeignKey("product_catalog.id"), nullable=False),
    )

    plan_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Name of the subscription plan"
    )

    plan_type: SubscriptionPlanType = Field(
        description="daily, weekly or custom"
    )

    status: SubscriptionStatus = Field(
        default=SubscriptionStatus.ACTIVE,
        description="Subscription status (active, paused, cancelled, completed)"
    )

    start_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    end_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Subscription end date (None = ongoing)"
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def can_transition_to(self, status: SubscriptionStatus) -> bool:
        return status in STATUS_TRANSITIONS[self.status]

    @property
    def is_closed(self) -> bool:
        return not STATUS_TRANSITIONS[self.status]


class SubscriptionSchedule(BaseModel, table=True):
    """
    SubscriptionSchedule - Quantity delivered on matching days

    Domain Rules:
    - Daily plans leave both day fields empty
    - day_of_week is 0 (Monday) to 6 (Sunday); day_of_month is 1 to 31
    - Replacing a schedule deactivates the old rows instead of deleting them
    """

    __tablename__ = "subscription_schedule"
    __table_args__ = (
        Index('ix_subscription_schedule_plan_id', 'subscription_plan_id'),
        CheckConstraint('quantity > 0', name='schedule_quantity_positive'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
    )

    subscription_plan_id: int = Field(
        sa_column=Column(IdType, ForeignKey("subscription_plans.id", ondelete="CASCADE"), nullable=False),
    )

    day_of_week: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
    )

    day_of_month: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
    )

    effective_from: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    effective_to: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
