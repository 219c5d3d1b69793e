from datetime import date
from typing import List, Optional
from libs.result import Error
from src.domain.subscription import (
    SubscriptionPlan,
    SubscriptionPlanType,
    SubscriptionSchedule,
    schedule_fits_plan,
)
from .dtos import ScheduleItemDTO, ScheduleItemResponseDTO, SubscriptionResponseDTO


def to_subscription_response(
    plan: SubscriptionPlan, schedule: List[SubscriptionSchedule]
) -> SubscriptionResponseDTO:
    return SubscriptionResponseDTO(
        subscription_id=plan.id,
        customer_id=plan.customer_id,
        product_id=plan.product_id,
        plan_name=plan.plan_name,
        plan_type=plan.plan_type,
        status=plan.status,
        start_date=plan.start_date,
        end_date=plan.end_date,
        schedule=[
            ScheduleItemResponseDTO(
                schedule_id=row.id,
                day_of_week=row.day_of_week,
                day_of_month=row.day_of_month,
                quantity=row.quantity,
                effective_from=row.effective_from,
                effective_to=row.effective_to,
                is_active=row.is_active,
            )
            for row in schedule
        ],
        created_at=plan.created_at,
        updated_at=plan.updated_at,
    )


def check_schedule(
    plan_type: SubscriptionPlanType, items: List[ScheduleItemDTO]
) -> Optional[Error]:
    """
    Validate schedule rows against the plan type

    Returns:
        INVALID_SCHEDULE error, or None when every row fits and no day repeats
    """
    seen = set()
    for item in items:
        if not schedule_fits_plan(plan_type, item.day_of_week, item.day_of_month):
            return Error(
                code="INVALID_SCHEDULE",
                message=f"Schedule row does not fit a {plan_type.value} plan",
                reason=item.model_dump_json(),
            )
        key = (item.day_of_week, item.day_of_month)
        if key in seen:
            return Error(
                code="INVALID_SCHEDULE",
                message="Schedule lists the same day twice",
                reason=item.model_dump_json(),
            )
        seen.add(key)
    return None


def build_schedule(
    plan_id: int, items: List[ScheduleItemDTO], default_from: date
) -> List[SubscriptionSchedule]:
    return [
        SubscriptionSchedule(
            subscription_plan_id=plan_id,
            day_of_week=item.day_of_week,
            day_of_month=item.day_of_month,
            quantity=item.quantity,
            effective_from=item.effective_from or default_from,
            effective_to=item.effective_to,
        )
        for item in items
    ]


def subscription_not_found(plan_id: int) -> Error:
    return Error(code="SUBSCRIPTION_NOT_FOUND", message=f"Subscription {plan_id} not found")
