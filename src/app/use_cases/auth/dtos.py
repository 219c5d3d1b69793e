"""Data Transfer Objects for Authentication Use Cases"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.user import UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterUserCommandDTO(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., pattern=r"^\+?[0-9]{10,15}$")
    role: UserRole = Field(default=UserRole.DELIVERY_PERSON)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    class Config:
        json_schema_extra = {
            "example": {
                "email": "ravi@milkdelivery.com",
                "password": "s3cret-pass",
                "full_name": "Ravi Kumar",
                "phone": "9876543210",
                "role": "delivery_person"
            }
        }


class LoginCommandDTO(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ChangePasswordCommandDTO(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class UpdateProfileCommandDTO(BaseModel):
    """Fields left as None are unchanged; email and role are not self-service"""

    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, pattern=r"^\+?[0-9]{10,15}$")


class UserResponseDTO(BaseModel):
    user_id: int
    email: str
    full_name: str
    phone: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None


class AuthResponseDTO(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponseDTO
