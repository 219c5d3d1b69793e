"""Invoice Line Item Domain Entity

Tracks individual line items within an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, DateTime
from src.domain.base import BaseModel, IdType, id_column, utc_now


class InvoiceLineItem(BaseModel, table=True):
    """
    Invoice Line Item - Individual line within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - line_total = quantity * unit_price
    - delivery_id, when set, is unique: a delivery is billed once
    """

    __tablename__ = "invoice_line_items"
    __table_args__ = (
        Index('ix_invoice_line_items_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique invoice line identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(IdType, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    delivery_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("deliveries.id"), nullable=True, unique=True),
        description="Delivery billed by this line, if any"
    )

    product_id: int = Field(
        sa_column=Column(IdType, ForeignKey("product_catalog.id"), nullable=False),
    )

    description: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Line item description (e.g., 'Cow Milk 1L - 2024-01-05')"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
    )

    line_total: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="quantity * unit_price"
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
