"""Product Domain Entity

Catalog of deliverable dairy products.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Boolean, Numeric, String, Text, DateTime
from src.domain.base import BaseModel, id_column, utc_now


class ProductUnit(str, Enum):
    """Units a product is sold in"""
    LITRE = "L"
    MILLILITRE = "mL"
    KILOGRAM = "kg"
    GRAM = "g"
    PIECES = "pieces"
    DOZEN = "dozen"
    PACK = "pack"


class Product(BaseModel, table=True):
    """
    Product - A catalog item with a unit price

    Domain Rules:
    - product_code must be unique
    - price_per_unit is used to price new deliveries; existing deliveries keep their amount
    """

    __tablename__ = "product_catalog"

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique product identifier (auto-increment)"
    )

    product_code: str = Field(
        sa_column=Column(String(30), nullable=False, unique=True),
        description="Unique product code (e.g., MILK-COW-1L)"
    )

    product_name: str = Field(
        sa_column=Column(String(150), nullable=False),
    )

    unit: ProductUnit = Field(
        description="Selling unit"
    )

    price_per_unit: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Price per unit (precision: 12,2)"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
