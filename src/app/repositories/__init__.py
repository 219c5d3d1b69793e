from .user_repository import UserRepository
from .area_repository import AreaRepository
from .area_assignment_repository import AreaAssignmentRepository
from .product_repository import ProductRepository
from .customer_repository import CustomerRepository
from .subscription_repository import SubscriptionRepository
from .delivery_repository import DeliveryRepository, RouteStop, CalendarDay
from .delivery_exception_repository import DeliveryExceptionRepository
from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository
from .payment_repository import PaymentRepository
from .payment_allocation_repository import PaymentAllocationRepository
from .report_repository import (
    ReportRepository,
    OpenBalanceRow,
    PendingCollectionRow,
    DeliveryTotals,
    DeliveryReportRow,
    TopCustomerRow,
    ProductPopularityRow,
)

__all__ = [
    "UserRepository",
    "AreaRepository",
    "AreaAssignmentRepository",
    "ProductRepository",
    "CustomerRepository",
    "SubscriptionRepository",
    "DeliveryRepository",
    "RouteStop",
    "CalendarDay",
    "DeliveryExceptionRepository",
    "InvoiceRepository",
    "InvoiceLineRepository",
    "PaymentRepository",
    "PaymentAllocationRepository",
    "ReportRepository",
    "OpenBalanceRow",
    "PendingCollectionRow",
    "DeliveryTotals",
    "DeliveryReportRow",
    "TopCustomerRow",
    "ProductPopularityRow",
]
