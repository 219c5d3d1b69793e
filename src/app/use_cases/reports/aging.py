"""Bucket accumulation shared by the outstanding and aging reports"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Tuple
from src.domain.aging import bucket_for
from .dtos import AgingAmountsDTO


def accumulate(
    amounts: AgingAmountsDTO, balances: Iterable[Tuple[date, Decimal]], today: date
) -> AgingAmountsDTO:
    """Add (due_date, balance) pairs into amounts, in place"""
    for due_date, balance in balances:
        bucket = bucket_for(due_date, today)
        setattr(amounts, bucket.value, getattr(amounts, bucket.value) + balance)
        amounts.total_outstanding += balance
    return amounts
