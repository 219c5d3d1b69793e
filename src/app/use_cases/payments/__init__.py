from .record_payment import RecordPayment
from .delete_payment import DeletePayment
from .get_payment import GetPayment
from .list_payments import ListPayments
from .update_payment import UpdatePayment
from .get_pending_collections import GetPendingCollections
from .dtos import (
    InvoiceAllocationDTO,
    AutoAllocation,
    ExplicitAllocation,
    RecordPaymentCommandDTO,
    UpdatePaymentCommandDTO,
    AllocationResponseDTO,
    PaymentResponseDTO,
    PaymentListResponseDTO,
    PendingCollectionDTO,
)

__all__ = [
    "RecordPayment",
    "DeletePayment",
    "GetPayment",
    "ListPayments",
    "UpdatePayment",
    "GetPendingCollections",
    "InvoiceAllocationDTO",
    "AutoAllocation",
    "ExplicitAllocation",
    "RecordPaymentCommandDTO",
    "UpdatePaymentCommandDTO",
    "AllocationResponseDTO",
    "PaymentResponseDTO",
    "PaymentListResponseDTO",
    "PendingCollectionDTO",
]
