"""Unit tests for aging bucket classification"""

import pytest
from datetime import date, timedelta
from src.domain.aging import AgingBucket, bucket_for, days_overdue

TODAY = date(2024, 6, 30)


class TestDaysOverdue:

    def test_future_due_date_is_negative(self):
        assert days_overdue(TODAY + timedelta(days=3), TODAY) == -3

    def test_past_due_date_is_positive(self):
        assert days_overdue(TODAY - timedelta(days=45), TODAY) == 45


class TestBucketFor:

    @pytest.mark.parametrize(
        "days_past_due, expected",
        [
            (-10, AgingBucket.CURRENT),
            (0, AgingBucket.CURRENT),
            (1, AgingBucket.DAYS_1_30),
            (30, AgingBucket.DAYS_1_30),
            (31, AgingBucket.DAYS_31_60),
            (60, AgingBucket.DAYS_31_60),
            (61, AgingBucket.DAYS_61_90),
            (90, AgingBucket.DAYS_61_90),
            (91, AgingBucket.DAYS_90_PLUS),
            (400, AgingBucket.DAYS_90_PLUS),
        ],
    )
    def test_bucket_boundaries(self, days_past_due, expected):
        due_date = TODAY - timedelta(days=days_past_due)

        assert bucket_for(due_date, TODAY) == expected
