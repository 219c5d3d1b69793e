"""Shared base for domain entities"""

from datetime import datetime, timezone
from sqlalchemy import BigInteger, Column, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(SQLModel):
    """Base class for all table models"""
    pass


def id_column() -> Column:
    """Auto-increment primary key column"""
    return Column(IdType, primary_key=True, autoincrement=True)


def utc_now() -> datetime:
    """Timezone-aware current time for timestamp columns"""
    return datetime.now(timezone.utc)
