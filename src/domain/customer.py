"""Customer Domain Entity

Household receiving home deliveries.
"""

from datetime import datetime, date
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, String, Text, Date, DateTime
from src.domain.base import BaseModel, IdType, id_column, utc_now


class CustomerStatus(str, Enum):
    """Customer account status"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class Customer(BaseModel, table=True):
    """
    Customer - A delivery recipient and billing party

    Domain Rules:
    - customer_code is unique and generated (CUST-NNNNN)
    - Every customer belongs to exactly one area
    - Customers are deactivated rather than deleted once they have invoices
    """

    __tablename__ = "customers"
    __table_args__ = (
        Index('ix_customers_area_id', 'area_id'),
        Index('ix_customers_phone', 'phone'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique customer identifier (auto-increment)"
    )

    customer_code: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Unique customer code (e.g., CUST-00042)"
    )

    full_name: str = Field(
        sa_column=Column(String(150), nullable=False),
    )

    phone: str = Field(
        sa_column=Column(String(20), nullable=False),
    )

    email: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    area_id: int = Field(
        sa_column=Column(IdType, ForeignKey("areas.id"), nullable=False),
        description="Foreign key to Area"
    )

    address_line1: str = Field(
        sa_column=Column(String(255), nullable=False),
    )

    address_line2: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    city: str = Field(
        sa_column=Column(String(100), nullable=False),
    )

    pincode: str = Field(
        sa_column=Column(String(10), nullable=False),
    )

    location_notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    status: CustomerStatus = Field(
        default=CustomerStatus.ACTIVE,
        description="Customer status (active, inactive, suspended)"
    )

    joining_date: date = Field(
        default_factory=date.today,
        sa_column=Column(Date, nullable=False),
    )

    created_by: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("users.id"), nullable=True),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
