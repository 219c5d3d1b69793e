"""Aging buckets for outstanding balances"""

from datetime import date
from enum import Enum


class AgingBucket(str, Enum):
    CURRENT = "current_amount"
    DAYS_1_30 = "days_1_30"
    DAYS_31_60 = "days_31_60"
    DAYS_61_90 = "days_61_90"
    DAYS_90_PLUS = "days_90_plus"


def days_overdue(due_date: date, today: date) -> int:
    """Days past due; zero or negative means not yet overdue"""
    return (today - due_date).days


def bucket_for(due_date: date, today: date) -> AgingBucket:
    """Classify an open invoice by how far past its due date it is"""
    days = days_overdue(due_date, today)
    if days <= 0:
        return AgingBucket.CURRENT
    if days <= 30:
        return AgingBucket.DAYS_1_30
    if days <= 60:
        return AgingBucket.DAYS_31_60
    if days <= 90:
        return AgingBucket.DAYS_61_90
    return AgingBucket.DAYS_90_PLUS
