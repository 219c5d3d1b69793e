"""Request schemas for Payment API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.payment import PaymentMethod, PaymentStatus
from src.app.use_cases.payments.dtos import (
    AutoAllocation,
    ExplicitAllocation,
    InvoiceAllocationDTO,
    RecordPaymentCommandDTO,
    UpdatePaymentCommandDTO,
)


class InvoiceAllocationSchema(BaseModel):
    invoice_id: int = Field(..., description="Invoice to pay")

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount applied to the invoice (must be > 0)"
    )

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v):
        if v.as_tuple().exponent < -2:
            raise ValueError("Amount must have at most 2 decimal places")
        return v


class RecordPaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /payments. Without invoice_allocations the payment is
    spread over open invoices, oldest due date first.
    """

    customer_id: int = Field(..., description="Paying customer")

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount received (must be > 0)"
    )

    payment_date: date = Field(
        default_factory=date.today,
        description="Date the money was received (defaults to today)"
    )

    payment_method: PaymentMethod = Field(..., description="cash, upi, card, bank_transfer or cheque")

    transaction_reference: Optional[str] = Field(default=None, max_length=100)

    notes: Optional[str] = Field(default=None)

    invoice_allocations: Optional[List[InvoiceAllocationSchema]] = Field(
        default=None,
        description="Explicit (invoice_id, amount) pairs; omit for auto allocation"
    )

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v):
        """Ensure amount is positive and has at most two decimal places"""
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        if v.as_tuple().exponent < -2:
            raise ValueError("Amount must have at most 2 decimal places")
        return v

    def to_command(self, received_by: Optional[int] = None) -> RecordPaymentCommandDTO:
        if self.invoice_allocations:
            allocation = ExplicitAllocation(
                allocations=[
                    InvoiceAllocationDTO(invoice_id=a.invoice_id, amount=a.amount)
                    for a in self.invoice_allocations
                ]
            )
        else:
            allocation = AutoAllocation()

        return RecordPaymentCommandDTO(
            customer_id=self.customer_id,
            amount=self.amount,
            payment_date=self.payment_date,
            payment_method=self.payment_method,
            transaction_reference=self.transaction_reference,
            notes=self.notes,
            received_by=received_by,
            allocation=allocation,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "amount": "120.00",
                "payment_date": "2024-03-05",
                "payment_method": "cash",
                "invoice_allocations": [
                    {"invoice_id": 4, "amount": "50.00"},
                    {"invoice_id": 7, "amount": "70.00"}
                ]
            }
        }


class UpdatePaymentRequestSchema(BaseModel):
    """Used for PATCH /payments/{payment_id}"""

    payment_status: Optional[PaymentStatus] = None

    transaction_reference: Optional[str] = Field(default=None, max_length=100)

    notes: Optional[str] = None

    def to_command(self) -> UpdatePaymentCommandDTO:
        return UpdatePaymentCommandDTO(
            payment_status=self.payment_status,
            transaction_reference=self.transaction_reference,
            notes=self.notes,
        )
