from .get_customer_outstanding import GetCustomerOutstanding
from .get_aging_report import GetAgingReport
from .get_dashboard_summary import GetDashboardSummary
from .get_financial_summary import GetFinancialSummary
from .get_delivery_report import GetDeliveryReport
from .get_customer_analytics import GetCustomerAnalytics
from .dtos import (
    AgingAmountsDTO,
    CustomerOutstandingDTO,
    AgingReportRowDTO,
    AgingReportDTO,
    DashboardSummaryDTO,
    DeliveryGrouping,
    FinancialSummaryDTO,
    DeliveryReportDTO,
    CustomerAnalyticsDTO,
)

__all__ = [
    "GetCustomerOutstanding",
    "GetAgingReport",
    "GetDashboardSummary",
    "GetFinancialSummary",
    "GetDeliveryReport",
    "GetCustomerAnalytics",
    "AgingAmountsDTO",
    "CustomerOutstandingDTO",
    "AgingReportRowDTO",
    "AgingReportDTO",
    "DashboardSummaryDTO",
    "DeliveryGrouping",
    "FinancialSummaryDTO",
    "DeliveryReportDTO",
    "CustomerAnalyticsDTO",
]
