"""Data Transfer Objects for Payment Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field
from src.domain.payment import PaymentMethod, PaymentStatus


class InvoiceAllocationDTO(BaseModel):
    """One caller-chosen (invoice, amount) pair"""

    invoice_id: int = Field(..., description="Invoice receiving the money")

    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Amount to apply to the invoice (must be > 0)"
    )


class AutoAllocation(BaseModel):
    """Apply the payment to open invoices, oldest due date first"""

    mode: Literal["auto"] = "auto"


class ExplicitAllocation(BaseModel):
    """Apply the payment exactly as listed by the caller"""

    mode: Literal["explicit"] = "explicit"

    allocations: List[InvoiceAllocationDTO] = Field(..., min_length=1)


AllocationInstruction = Annotated[
    Union[AutoAllocation, ExplicitAllocation],
    Field(discriminator="mode"),
]


class RecordPaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment

    Used as input to RecordPayment use case.
    """

    customer_id: int = Field(..., description="Paying customer")

    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Amount received (must be > 0)"
    )

    payment_date: date = Field(..., description="Date the money was received")

    payment_method: PaymentMethod = Field(..., description="How the money was received")

    transaction_reference: Optional[str] = Field(default=None, max_length=100)

    notes: Optional[str] = Field(default=None)

    received_by: Optional[int] = Field(
        default=None,
        description="User recording the payment"
    )

    allocation: AllocationInstruction = Field(
        default_factory=AutoAllocation,
        description="Auto allocation or an explicit list of invoice allocations"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "amount": "120.00",
                "payment_date": "2024-03-05",
                "payment_method": "upi",
                "transaction_reference": "UPI-88213",
                "allocation": {"mode": "auto"}
            }
        }


class UpdatePaymentCommandDTO(BaseModel):
    """
    Command DTO for updating payment bookkeeping fields

    Amount, customer and allocations are immutable; fields left as None are unchanged.
    """

    payment_status: Optional[PaymentStatus] = None

    transaction_reference: Optional[str] = Field(default=None, max_length=100)

    notes: Optional[str] = None


class AllocationResponseDTO(BaseModel):
    allocation_id: int
    invoice_id: int
    invoice_number: Optional[str] = None
    invoice_total: Optional[Decimal] = None
    allocated_amount: Decimal


class PaymentResponseDTO(BaseModel):
    """
    Response DTO for a payment

    Returned by RecordPayment, GetPayment, UpdatePayment and ListPayments.
    """

    payment_id: int
    payment_code: str
    customer_id: int
    amount: Decimal
    payment_date: date
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    transaction_reference: Optional[str] = None
    notes: Optional[str] = None
    received_by: Optional[int] = None
    allocations: List[AllocationResponseDTO] = Field(default_factory=list)
    allocated_amount: Optional[Decimal] = Field(
        default=None,
        description="Sum of allocations; None when allocations were not loaded"
    )
    unallocated_amount: Optional[Decimal] = Field(
        default=None,
        description="Credit left on the payment after allocation"
    )
    created_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "payment_id": 12,
                "payment_code": "PAY-2024-000012",
                "customer_id": 1,
                "amount": "120.00",
                "payment_date": "2024-03-05",
                "payment_method": "upi",
                "payment_status": "completed",
                "allocations": [
                    {"allocation_id": 30, "invoice_id": 4, "invoice_number": "INV-2024-000004",
                     "invoice_total": "50.00", "allocated_amount": "50.00"},
                    {"allocation_id": 31, "invoice_id": 7, "invoice_number": "INV-2024-000007",
                     "invoice_total": "100.00", "allocated_amount": "70.00"}
                ],
                "allocated_amount": "120.00",
                "unallocated_amount": "0.00",
                "created_at": "2024-03-05T10:30:00Z"
            }
        }


class PaymentListResponseDTO(BaseModel):
    payments: List[PaymentResponseDTO]
    total: int
    limit: int
    offset: int


class PendingCollectionDTO(BaseModel):
    """Customer with open invoices, for the collection round"""

    customer_id: int
    customer_code: str
    customer_name: str
    phone: str
    area_name: Optional[str] = None
    total_pending: Decimal
    pending_invoices: int
    oldest_due_date: date
