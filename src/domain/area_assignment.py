"""Area Assignment Domain Entity

Links delivery staff to the areas they serve.
"""

from datetime import datetime, date
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Boolean, Date, DateTime, ForeignKey
from src.domain.base import BaseModel, IdType, id_column, utc_now


class AreaAssignment(BaseModel, table=True):
    """
    AreaAssignment - A staff member assigned to an area

    Domain Rules:
    - At most one active assignment per (user, area)
    - Removing an assignment deactivates it; history is kept
    """

    __tablename__ = "delivery_personnel_assignments"
    __table_args__ = (
        Index('ix_assignments_area_id', 'area_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
    )

    user_id: int = Field(
        sa_column=Column(IdType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    )

    area_id: int = Field(
        sa_column=Column(IdType, ForeignKey("areas.id", ondelete="CASCADE"), nullable=False),
    )

    assigned_date: date = Field(
        default_factory=date.today,
        sa_column=Column(Date, nullable=False),
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
