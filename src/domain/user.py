"""User Domain Entity

Staff accounts that operate the dashboard.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Boolean, String, DateTime
from src.domain.base import BaseModel, id_column, utc_now


class UserRole(str, Enum):
    """Staff roles"""
    ADMIN = "admin"
    MANAGER = "manager"
    DELIVERY_PERSON = "delivery_person"


class User(BaseModel, table=True):
    """
    User - A staff member with a role

    Domain Rules:
    - email and phone are unique
    - password_hash is a bcrypt hash, never the plaintext password
    - Deactivated users cannot log in
    """

    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique user identifier (auto-increment)"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True),
    )

    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
    )

    full_name: str = Field(
        sa_column=Column(String(150), nullable=False),
    )

    phone: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
    )

    role: UserRole = Field(
        default=UserRole.DELIVERY_PERSON,
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
