"""GetSubscription and ListSubscriptions Use Cases"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.subscription import SubscriptionStatus
from .dtos import SubscriptionResponseDTO, SubscriptionListResponseDTO
from .mappers import subscription_not_found, to_subscription_response


class GetSubscription:

    def __init__(self, subscription_repo: SubscriptionRepository):
        self.subscription_repo = subscription_repo

    async def execute(self, subscription_id: int) -> Result[SubscriptionResponseDTO]:
        try:
            plan = await self.subscription_repo.get_by_id(subscription_id)
            if not plan:
                return Return.err(subscription_not_found(subscription_id))

            schedules = await self.subscription_repo.get_active_schedules([plan.id])
            return Return.ok(to_subscription_response(plan, schedules[plan.id]))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_SUBSCRIPTION_FAILED",
                    message="Failed to retrieve subscription",
                    reason=str(e),
                )
            )


class ListSubscriptions:
    """
    Use Case: List subscription plans with their active schedules

    Schedules for the whole page are loaded in one query.
    """

    def __init__(self, subscription_repo: SubscriptionRepository):
        self.subscription_repo = subscription_repo

    async def execute(
        self,
        customer_id: Optional[int] = None,
        product_id: Optional[int] = None,
        status: Optional[SubscriptionStatus] = None,
        area_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[SubscriptionListResponseDTO]:
        try:
            plans, total = await self.subscription_repo.list(
                customer_id=customer_id,
                product_id=product_id,
                status=status,
                area_id=area_id,
                limit=limit,
                offset=offset,
            )
            schedules = await self.subscription_repo.get_active_schedules([plan.id for plan in plans])

            return Return.ok(
                SubscriptionListResponseDTO(
                    subscriptions=[
                        to_subscription_response(plan, schedules.get(plan.id, []))
                        for plan in plans
                    ],
                    total=total,
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_SUBSCRIPTIONS_FAILED",
                    message="Failed to list subscriptions",
                    reason=str(e),
                )
            )
