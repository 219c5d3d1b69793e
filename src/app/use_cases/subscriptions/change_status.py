"""Pause, resume and cancel subscription Use Cases"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.subscription import SubscriptionPlan, SubscriptionStatus
from .dtos import SubscriptionResponseDTO
from .mappers import subscription_not_found, to_subscription_response
from .update_subscription import transition_error

logger = logging.getLogger(__name__)


class ChangeSubscriptionStatus:
    """
    Move a plan to target_status when its current status allows it

    Subclasses set target_status and may adjust the plan in apply().
    """

    target_status: SubscriptionStatus

    def __init__(self, uow: UnitOfWork, subscription_repo: SubscriptionRepository):
        self.uow = uow
        self.subscription_repo = subscription_repo

    def apply(self, plan: SubscriptionPlan) -> None:
        plan.status = self.target_status

    async def execute(self, subscription_id: int) -> Result[SubscriptionResponseDTO]:
        try:
            plan = await self.subscription_repo.get_by_id(subscription_id)
            if not plan:
                return Return.err(subscription_not_found(subscription_id))

            error = transition_error(plan, self.target_status)
            if error:
                return Return.err(error)

            self.apply(plan)
            plan = await self.subscription_repo.update(plan)
            await self.uow.commit()

            logger.info(f"Subscription {plan.id} is now {plan.status.value}")

            schedules = await self.subscription_repo.get_active_schedules([plan.id])
            return Return.ok(to_subscription_response(plan, schedules[plan.id]))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CHANGE_SUBSCRIPTION_STATUS_FAILED",
                    message=f"Failed to set subscription to {self.target_status.value}",
                    reason=str(e),
                )
            )


class PauseSubscription(ChangeSubscriptionStatus):
    target_status = SubscriptionStatus.PAUSED


class ResumeSubscription(ChangeSubscriptionStatus):
    target_status = SubscriptionStatus.ACTIVE


class CancelSubscription(ChangeSubscriptionStatus):
    """Cancelling ends the plan today, or on its start date if it has not begun"""

    target_status = SubscriptionStatus.CANCELLED

    def apply(self, plan: SubscriptionPlan) -> None:
        super().apply(plan)
        plan.end_date = max(date.today(), plan.start_date)
