"""Data Transfer Objects for Report Use Cases"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

ZERO = Decimal("0.00")


class AgingAmountsDTO(BaseModel):
    """
    Outstanding balance split by days past due

    total_outstanding equals the sum of the five buckets.
    """

    total_outstanding: Decimal = ZERO
    current_amount: Decimal = ZERO
    days_1_30: Decimal = ZERO
    days_31_60: Decimal = ZERO
    days_61_90: Decimal = ZERO
    days_90_plus: Decimal = ZERO


class CustomerOutstandingDTO(AgingAmountsDTO):
    customer_id: int
    as_of: date

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "as_of": "2024-03-10",
                "total_outstanding": "230.00",
                "current_amount": "80.00",
                "days_1_30": "150.00",
                "days_31_60": "0.00",
                "days_61_90": "0.00",
                "days_90_plus": "0.00"
            }
        }


class AgingReportRowDTO(AgingAmountsDTO):
    customer_id: int
    customer_code: str
    customer_name: str
    open_invoices: int


class AgingReportDTO(BaseModel):
    as_of: date
    customers: List[AgingReportRowDTO]
    totals: AgingAmountsDTO


class DashboardSummaryDTO(BaseModel):
    """Operational snapshot for one day"""

    summary_date: date
    deliveries: Dict[str, int] = Field(
        default_factory=dict,
        description="Delivery counts by status for the day"
    )
    delivered_revenue: Decimal
    payments_count: int
    payments_total: Decimal
    total_outstanding: Decimal
    pending_customers: int = Field(description="Customers with at least one open invoice")
    overdue_invoices: int = Field(description="Open invoices past their due date")
    overdue_amount: Decimal
    active_customers: int
    active_subscriptions: int
    active_areas: int


DeliveryGrouping = Literal["date", "area", "person"]


class RevenueSummaryDTO(BaseModel):
    total_deliveries: int
    completed_deliveries: int
    total_revenue: Decimal = ZERO
    total_quantity_delivered: Decimal = ZERO


class CollectionSummaryDTO(BaseModel):
    total_payments: int
    total_collected: Decimal = ZERO
    by_method: Dict[str, Decimal] = Field(
        default_factory=dict,
        description="Completed payments per method; every method is listed"
    )


class OutstandingSummaryDTO(BaseModel):
    total_outstanding: Decimal = ZERO
    outstanding_invoices: int = 0


class SubscriptionSummaryDTO(BaseModel):
    active_subscriptions: int = 0
    daily_plans: int = 0
    weekly_plans: int = 0
    custom_plans: int = 0


class FinancialSummaryDTO(BaseModel):
    """Revenue, collections, receivables and plan counts for a period"""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    revenue: RevenueSummaryDTO
    payments: CollectionSummaryDTO
    outstanding: OutstandingSummaryDTO
    subscriptions: SubscriptionSummaryDTO


class DeliveryReportRowDTO(BaseModel):
    scheduled_date: date
    group_id: Optional[int] = None
    group_name: Optional[str] = None
    total_deliveries: int
    completed: int
    missed: int
    cancelled: int
    total_quantity_scheduled: Decimal
    total_quantity_delivered: Decimal
    total_amount: Decimal
    completion_rate: Decimal = Field(description="Percent delivered, two decimals")


class DeliveryReportDTO(BaseModel):
    group_by: DeliveryGrouping
    rows: List[DeliveryReportRowDTO]


class CustomerStatsDTO(BaseModel):
    total_customers: int = 0
    active_customers: int = 0
    inactive_customers: int = 0
    suspended_customers: int = 0


class GrowthPointDTO(BaseModel):
    month: str = Field(description="YYYY-MM")
    new_customers: int


class TopCustomerDTO(BaseModel):
    customer_id: int
    customer_code: str
    customer_name: str
    phone: str
    area_name: str
    total_deliveries: int
    total_revenue: Decimal
    active_subscriptions: int


class ProductPopularityDTO(BaseModel):
    product_id: int
    product_code: str
    product_name: str
    total_orders: int
    total_quantity_sold: Decimal
    total_revenue: Decimal


class CustomerAnalyticsDTO(BaseModel):
    customer_stats: CustomerStatsDTO
    growth_trend: List[GrowthPointDTO] = Field(description="Last 12 joining months, newest first")
    top_customers: List[TopCustomerDTO]
    product_popularity: List[ProductPopularityDTO]
