"""Data Transfer Objects for Area and Product Catalog Use Cases"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.product import ProductUnit


class CreateAreaCommandDTO(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=20, description="Unique short code, e.g. KTH")
    description: Optional[str] = None


class AreaResponseDTO(BaseModel):
    area_id: int
    name: str
    code: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime


class UpdateAreaCommandDTO(BaseModel):
    """Fields left as None are unchanged"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    code: Optional[str] = Field(default=None, min_length=1, max_length=20)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class AreaDetailDTO(AreaResponseDTO):
    customer_count: int = Field(description="Customers of any status in the area")
    personnel_count: int = Field(description="Staff with an active assignment")


class AssignPersonnelCommandDTO(BaseModel):
    user_id: int
    assigned_date: Optional[date] = Field(default=None, description="Defaults to today")


class AreaPersonnelDTO(BaseModel):
    assignment_id: int
    area_id: int
    user_id: int
    full_name: str
    email: str
    phone: str
    assigned_date: date
    is_active: bool


class CreateProductCommandDTO(BaseModel):
    product_code: str = Field(..., min_length=1, max_length=50)
    product_name: str = Field(..., min_length=1, max_length=255)
    unit: ProductUnit
    price_per_unit: Decimal = Field(..., ge=0, decimal_places=2)
    description: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "product_code": "MILK-COW-1L",
                "product_name": "Cow Milk 1L",
                "unit": "L",
                "price_per_unit": "60.00"
            }
        }


class ProductResponseDTO(BaseModel):
    product_id: int
    product_code: str
    product_name: str
    unit: ProductUnit
    price_per_unit: Decimal
    description: Optional[str] = None
    is_active: bool
    created_at: datetime


class UpdateProductCommandDTO(BaseModel):
    """
    Fields left as None are unchanged

    A new price applies to deliveries scheduled afterwards; existing
    delivery amounts keep the price they were scheduled at.
    """

    product_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    unit: Optional[ProductUnit] = None
    price_per_unit: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    description: Optional[str] = None
    is_active: Optional[bool] = None
