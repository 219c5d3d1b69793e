"""Data Transfer Objects for Delivery Use Cases"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from src.domain.delivery import DeliveryStatus
from src.domain.delivery_exception import DeliveryExceptionType
from src.domain.product import ProductUnit


class ScheduleDeliveryCommandDTO(BaseModel):
    customer_id: int
    product_id: int
    scheduled_date: date
    quantity: Decimal = Field(..., gt=0, description="Scheduled quantity (must be > 0)")
    subscription_plan_id: Optional[int] = Field(
        default=None,
        description="Plan this drop belongs to; must be the same customer and product"
    )
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "product_id": 1,
                "scheduled_date": "2024-03-01",
                "quantity": "1.5"
            }
        }


class CompleteDeliveryCommandDTO(BaseModel):
    """Delivered quantity defaults to the scheduled quantity"""

    delivered_quantity: Optional[Decimal] = Field(default=None, gt=0)
    notes: Optional[str] = None
    customer_feedback: Optional[str] = None
    delivered_by: Optional[int] = Field(default=None, description="Set from the caller")


class MarkMissedCommandDTO(BaseModel):
    notes: Optional[str] = None
    delivered_by: Optional[int] = Field(default=None, description="Set from the caller")


class DeliveryResponseDTO(BaseModel):
    delivery_id: int
    customer_id: int
    product_id: int
    scheduled_date: date
    scheduled_quantity: Decimal
    delivered_quantity: Decimal
    amount: Decimal
    delivery_status: DeliveryStatus
    subscription_plan_id: Optional[int] = None
    delivery_notes: Optional[str] = None
    customer_feedback: Optional[str] = None
    delivered_at: Optional[datetime] = None
    delivered_by: Optional[int] = None


class DeliveryListResponseDTO(BaseModel):
    deliveries: List[DeliveryResponseDTO]
    total: int
    limit: int
    offset: int


class UpdateDeliveryCommandDTO(BaseModel):
    """
    Fields left as None are unchanged

    Date, quantity and status can only change while the delivery is
    still open (scheduled or out for delivery). Use the complete and
    missed actions to close a delivery.
    """

    scheduled_date: Optional[date] = None
    scheduled_quantity: Optional[Decimal] = Field(default=None, gt=0)
    delivery_status: Optional[DeliveryStatus] = None
    delivery_notes: Optional[str] = None
    customer_feedback: Optional[str] = None


class RouteStopDTO(DeliveryResponseDTO):
    """A delivery with what the delivery person needs at the door"""

    customer_code: str
    customer_name: str
    phone: str
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    location_notes: Optional[str] = None
    area_name: str
    product_code: str
    product_name: str
    unit: ProductUnit


class RouteSheetDTO(BaseModel):
    delivery_date: date
    total: int
    status_counts: Dict[str, int] = Field(default_factory=dict)
    stops: List[RouteStopDTO]


class CalendarDayDTO(BaseModel):
    scheduled_date: date
    total_deliveries: int
    scheduled: int = 0
    out_for_delivery: int = 0
    delivered: int = 0
    missed: int = 0
    cancelled: int = 0
    total_quantity: Decimal
    total_amount: Decimal


class DeliveryCalendarDTO(BaseModel):
    year: int
    month: int
    days: List[CalendarDayDTO]


class ReportExceptionCommandDTO(BaseModel):
    exception_type: DeliveryExceptionType
    exception_notes: str = Field(..., min_length=1)
    reported_by: Optional[int] = Field(default=None, description="Set from the caller")


class DeliveryExceptionResponseDTO(BaseModel):
    exception_id: int
    delivery_id: int
    customer_id: int
    scheduled_date: date
    exception_type: DeliveryExceptionType
    exception_notes: str
    reported_by: Optional[int] = None
    reported_at: datetime


class DeliveryExceptionListResponseDTO(BaseModel):
    exceptions: List[DeliveryExceptionResponseDTO]
    total: int
    limit: int
    offset: int
