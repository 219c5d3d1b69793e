"""Area Domain Entity

Delivery areas group customers into routes.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Boolean, String, Text, DateTime
from src.domain.base import BaseModel, id_column, utc_now


class Area(BaseModel, table=True):
    """
    Area - A delivery zone

    Domain Rules:
    - code must be unique
    - Inactive areas keep their customers but are excluded from dashboards
    """

    __tablename__ = "areas"

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique area identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Area name"
    )

    code: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Unique short area code (e.g., KTH)"
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
