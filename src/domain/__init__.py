from .base import BaseModel, IdType
from .user import User, UserRole
from .area import Area
from .area_assignment import AreaAssignment
from .product import Product, ProductUnit
from .customer import Customer, CustomerStatus
from .subscription import (
    SubscriptionPlan,
    SubscriptionPlanType,
    SubscriptionSchedule,
    SubscriptionStatus,
    schedule_fits_plan,
)
from .delivery import Delivery, DeliveryStatus
from .delivery_exception import DeliveryException, DeliveryExceptionType
from .invoice import Invoice, InvoiceStatus
from .invoice_line import InvoiceLineItem
from .payment import Payment, PaymentMethod, PaymentStatus
from .payment_allocation import PaymentAllocation
from .aging import AgingBucket, bucket_for, days_overdue

__all__ = [
    "BaseModel",
    "IdType",
    "User",
    "UserRole",
    "Area",
    "AreaAssignment",
    "Product",
    "ProductUnit",
    "Customer",
    "CustomerStatus",
    "SubscriptionPlan",
    "SubscriptionPlanType",
    "SubscriptionSchedule",
    "SubscriptionStatus",
    "schedule_fits_plan",
    "Delivery",
    "DeliveryStatus",
    "DeliveryException",
    "DeliveryExceptionType",
    "Invoice",
    "InvoiceStatus",
    "InvoiceLineItem",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "PaymentAllocation",
    "AgingBucket",
    "bucket_for",
    "days_overdue",
]
