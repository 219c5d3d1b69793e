"""Data Transfer Objects for Customer Use Cases"""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.customer import CustomerStatus

PHONE_PATTERN = r"^\+?[0-9]{10,15}$"


class CreateCustomerCommandDTO(BaseModel):
    """
    Command DTO for registering a customer

    customer_code is generated (CUST-NNNNN).
    """

    full_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    email: Optional[str] = Field(default=None, max_length=255)
    area_id: int
    address_line1: str = Field(..., min_length=1, max_length=255)
    address_line2: Optional[str] = Field(default=None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    pincode: str = Field(..., min_length=4, max_length=10)
    location_notes: Optional[str] = None
    joining_date: Optional[date] = None
    created_by: Optional[int] = None

    class Config:
        json_schema_extra = {
            "example": {
                "full_name": "Anita Deshmukh",
                "phone": "9822012345",
                "area_id": 1,
                "address_line1": "Flat 4B, Sai Residency",
                "city": "Pune",
                "pincode": "411038"
            }
        }


class UpdateCustomerCommandDTO(BaseModel):
    """Fields left as None are unchanged"""

    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    email: Optional[str] = Field(default=None, max_length=255)
    area_id: Optional[int] = None
    address_line1: Optional[str] = Field(default=None, min_length=1, max_length=255)
    address_line2: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    pincode: Optional[str] = Field(default=None, min_length=4, max_length=10)
    location_notes: Optional[str] = None
    status: Optional[CustomerStatus] = None


class CustomerResponseDTO(BaseModel):
    customer_id: int
    customer_code: str
    full_name: str
    phone: str
    email: Optional[str] = None
    area_id: int
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    pincode: str
    location_notes: Optional[str] = None
    status: CustomerStatus
    joining_date: date
    created_at: datetime


class CustomerListResponseDTO(BaseModel):
    customers: List[CustomerResponseDTO]
    total: int
    limit: int
    offset: int
