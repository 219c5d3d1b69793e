"""DeleteSubscription Use Case"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.subscription_repository import SubscriptionRepository
from .mappers import subscription_not_found


class DeleteSubscription:
    """
    Use Case: Delete a plan and its schedule

    Deliveries already generated from the plan stay, unlinked.
    """

    def __init__(self, uow: UnitOfWork, subscription_repo: SubscriptionRepository):
        self.uow = uow
        self.subscription_repo = subscription_repo

    async def execute(self, subscription_id: int) -> Result[None]:
        try:
            plan = await self.subscription_repo.get_by_id(subscription_id)
            if not plan:
                return Return.err(subscription_not_found(subscription_id))

            await self.subscription_repo.delete(plan)
            await self.uow.commit()
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_SUBSCRIPTION_FAILED",
                    message="Failed to delete subscription",
                    reason=str(e),
                )
            )
