"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator
from src.domain.invoice import InvoiceStatus
from src.domain.payment import PaymentMethod


class InvoiceLineInputDTO(BaseModel):
    """
    One line of a manually created invoice

    unit_price and description default to the product catalog values.
    """

    product_id: int = Field(..., description="Catalog product being billed")

    quantity: Decimal = Field(..., gt=0, description="Quantity billed (must be > 0)")

    unit_price: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Price per unit; catalog price when omitted"
    )

    description: Optional[str] = Field(default=None, max_length=255)


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice from explicit line items

    Used as input to CreateInvoice use case.
    """

    customer_id: int = Field(..., description="Billed customer")

    billing_period_start: date

    billing_period_end: date

    invoice_date: Optional[date] = Field(default=None, description="Defaults to today")

    due_date: Optional[date] = Field(
        default=None,
        description="Defaults to billing_period_end plus the configured due days"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.SENT,
        description="Initial status, draft or sent"
    )

    tax_amount: Decimal = Field(default=Decimal("0"), ge=0)

    discount_amount: Decimal = Field(default=Decimal("0"), ge=0)

    lines: List[InvoiceLineInputDTO] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_period(self):
        if self.billing_period_end < self.billing_period_start:
            raise ValueError("billing_period_end must be on or after billing_period_start")
        if self.status not in (InvoiceStatus.DRAFT, InvoiceStatus.SENT):
            raise ValueError("New invoices must be draft or sent")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": 1,
                "billing_period_start": "2024-02-01",
                "billing_period_end": "2024-02-29",
                "lines": [
                    {"product_id": 1, "quantity": "29", "unit_price": "60.00"}
                ]
            }
        }


class GenerateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for billing a customer's delivered, not yet invoiced deliveries

    Used as input to GenerateInvoiceFromDeliveries use case.
    """

    customer_id: int

    billing_period_start: date

    billing_period_end: date

    due_date: Optional[date] = None

    tax_amount: Decimal = Field(default=Decimal("0"), ge=0)

    discount_amount: Decimal = Field(default=Decimal("0"), ge=0)

    @model_validator(mode="after")
    def check_period(self):
        if self.billing_period_end < self.billing_period_start:
            raise ValueError("billing_period_end must be on or after billing_period_start")
        return self


class InvoiceResponseDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    customer_id: int
    status: InvoiceStatus
    billing_period_start: date
    billing_period_end: date
    invoice_date: date
    due_date: date
    subtotal: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    balance_amount: Decimal
    created_at: datetime


class InvoiceLineResponseDTO(BaseModel):
    line_id: int
    delivery_id: Optional[int] = None
    product_id: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    line_total: Decimal


class InvoicePaymentDTO(BaseModel):
    """A payment allocation applied to an invoice"""

    allocation_id: int
    payment_id: int
    payment_code: str
    payment_date: date
    payment_method: PaymentMethod
    allocated_amount: Decimal


class InvoiceDetailResponseDTO(InvoiceResponseDTO):
    lines: List[InvoiceLineResponseDTO] = Field(default_factory=list)
    payments: List[InvoicePaymentDTO] = Field(default_factory=list)


class InvoiceListResponseDTO(BaseModel):
    invoices: List[InvoiceResponseDTO]
    total: int
    limit: int
    offset: int


class MonthlyInvoicingResultDTO(BaseModel):
    """Summary of one monthly invoicing run"""

    total_customers: int
    invoices_created: int
    skipped_customers: int = Field(description="Active customers with nothing to bill")
    failed_customers: int
    billing_period_start: date
    billing_period_end: date
    execution_time_ms: int
