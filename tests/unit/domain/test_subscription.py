"""Unit tests for subscription plan rules"""

import pytest
from datetime import date
from src.domain.subscription import (
    SubscriptionPlan,
    SubscriptionPlanType,
    SubscriptionStatus,
    schedule_fits_plan,
)


def make_plan(status=SubscriptionStatus.ACTIVE):
    return SubscriptionPlan(
        id=1,
        customer_id=1,
        product_id=1,
        plan_name="Morning milk",
        plan_type=SubscriptionPlanType.DAILY,
        status=status,
        start_date=date(2024, 3, 1),
    )


class TestScheduleFitsPlan:

    @pytest.mark.parametrize(
        "plan_type,day_of_week,day_of_month,expected",
        [
            (SubscriptionPlanType.DAILY, None, None, True),
            (SubscriptionPlanType.DAILY, 2, None, False),
            (SubscriptionPlanType.WEEKLY, 0, None, True),
            (SubscriptionPlanType.WEEKLY, None, None, False),
            (SubscriptionPlanType.WEEKLY, None, 15, False),
            (SubscriptionPlanType.CUSTOM, 6, None, True),
            (SubscriptionPlanType.CUSTOM, None, 1, True),
            (SubscriptionPlanType.CUSTOM, 3, 10, False),
            (SubscriptionPlanType.CUSTOM, None, None, False),
        ],
    )
    def test_day_fields_per_plan_type(self, plan_type, day_of_week, day_of_month, expected):
        assert schedule_fits_plan(plan_type, day_of_week, day_of_month) is expected


class TestStatusTransitions:
    """Test SubscriptionPlan.can_transition_to"""

    def test_active_plan_can_pause_cancel_or_complete(self):
        plan = make_plan()

        assert plan.can_transition_to(SubscriptionStatus.PAUSED)
        assert plan.can_transition_to(SubscriptionStatus.CANCELLED)
        assert plan.can_transition_to(SubscriptionStatus.COMPLETED)
        assert not plan.is_closed

    def test_paused_plan_resumes_but_does_not_complete(self):
        plan = make_plan(SubscriptionStatus.PAUSED)

        assert plan.can_transition_to(SubscriptionStatus.ACTIVE)
        assert plan.can_transition_to(SubscriptionStatus.CANCELLED)
        assert not plan.can_transition_to(SubscriptionStatus.COMPLETED)

    @pytest.mark.parametrize("status", [SubscriptionStatus.CANCELLED, SubscriptionStatus.COMPLETED])
    def test_closed_plans_are_final(self, status):
        plan = make_plan(status)

        assert plan.is_closed
        assert not plan.can_transition_to(SubscriptionStatus.ACTIVE)
        assert not plan.can_transition_to(SubscriptionStatus.PAUSED)
