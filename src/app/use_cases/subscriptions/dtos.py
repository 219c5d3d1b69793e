"""Data Transfer Objects for Subscription Use Cases"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator
from src.domain.subscription import SubscriptionPlanType, SubscriptionStatus


class ScheduleItemDTO(BaseModel):
    """
    One schedule row

    Leave both day fields empty for daily plans. day_of_week runs from
    0 (Monday) to 6 (Sunday).
    """

    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    quantity: Decimal = Field(..., gt=0, decimal_places=2)
    effective_from: Optional[date] = Field(default=None, description="Defaults to the plan start date")
    effective_to: Optional[date] = None

    @model_validator(mode="after")
    def check_effective_range(self):
        if self.effective_from and self.effective_to and self.effective_to < self.effective_from:
            raise ValueError("effective_to must not be before effective_from")
        return self


class CreateSubscriptionCommandDTO(BaseModel):
    customer_id: int
    product_id: int
    plan_name: str = Field(..., min_length=1, max_length=100)
    plan_type: SubscriptionPlanType
    start_date: date
    end_date: Optional[date] = None
    schedule: List[ScheduleItemDTO] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "product_id": 1,
                "plan_name": "Morning milk",
                "plan_type": "weekly",
                "start_date": "2024-03-01",
                "schedule": [
                    {"day_of_week": 0, "quantity": "2"},
                    {"day_of_week": 3, "quantity": "1"}
                ]
            }
        }


class UpdateSubscriptionCommandDTO(BaseModel):
    """Fields left as None are unchanged"""

    plan_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    end_date: Optional[date] = None
    status: Optional[SubscriptionStatus] = None


class ReplaceScheduleCommandDTO(BaseModel):
    schedule: List[ScheduleItemDTO] = Field(..., min_length=1)


class ScheduleItemResponseDTO(BaseModel):
    schedule_id: int
    day_of_week: Optional[int] = None
    day_of_month: Optional[int] = None
    quantity: Decimal
    effective_from: date
    effective_to: Optional[date] = None
    is_active: bool


class SubscriptionResponseDTO(BaseModel):
    subscription_id: int
    customer_id: int
    product_id: int
    plan_name: str
    plan_type: SubscriptionPlanType
    status: SubscriptionStatus
    start_date: date
    end_date: Optional[date] = None
    schedule: List[ScheduleItemResponseDTO] = Field(
        default_factory=list,
        description="Active schedule rows"
    )
    created_at: datetime
    updated_at: datetime


class SubscriptionListResponseDTO(BaseModel):
    subscriptions: List[SubscriptionResponseDTO]
    total: int
    limit: int
    offset: int
