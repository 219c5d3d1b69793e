from .user_repository import SqlAlchemyUserRepository
from .area_repository import SqlAlchemyAreaRepository
from .area_assignment_repository import SqlAlchemyAreaAssignmentRepository
from .product_repository import SqlAlchemyProductRepository
from .customer_repository import SqlAlchemyCustomerRepository
from .subscription_repository import SqlAlchemySubscriptionRepository
from .delivery_repository import SqlAlchemyDeliveryRepository
from .delivery_exception_repository import SqlAlchemyDeliveryExceptionRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .payment_allocation_repository import SqlAlchemyPaymentAllocationRepository
from .report_repository import SqlAlchemyReportRepository

__all__ = [
    "SqlAlchemyUserRepository",
    "SqlAlchemyAreaRepository",
    "SqlAlchemyAreaAssignmentRepository",
    "SqlAlchemyProductRepository",
    "SqlAlchemyCustomerRepository",
    "SqlAlchemySubscriptionRepository",
    "SqlAlchemyDeliveryRepository",
    "SqlAlchemyDeliveryExceptionRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyPaymentAllocationRepository",
    "SqlAlchemyReportRepository",
]
