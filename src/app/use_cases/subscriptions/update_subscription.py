"""UpdateSubscription and ReplaceSubscriptionSchedule Use Cases"""

import logging
from datetime import date
from typing import Optional
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.subscription import SubscriptionPlan, SubscriptionStatus
from .dtos import ReplaceScheduleCommandDTO, SubscriptionResponseDTO, UpdateSubscriptionCommandDTO
from .mappers import build_schedule, check_schedule, subscription_not_found, to_subscription_response

logger = logging.getLogger(__name__)


def transition_error(plan: SubscriptionPlan, status: SubscriptionStatus) -> Optional[Error]:
    if plan.can_transition_to(status):
        return None
    return Error(
        code="INVALID_SUBSCRIPTION_STATUS",
        message=f"Cannot move subscription {plan.id} from {plan.status.value} to {status.value}",
    )


class UpdateSubscription:
    """
    Use Case: Rename a plan, set its end date or change its status

    Status changes follow the plan's allowed transitions. Cancelling
    without an explicit end_date ends the plan today.
    """

    def __init__(self, uow: UnitOfWork, subscription_repo: SubscriptionRepository):
        self.uow = uow
        self.subscription_repo = subscription_repo

    async def execute(
        self, subscription_id: int, command: UpdateSubscriptionCommandDTO
    ) -> Result[SubscriptionResponseDTO]:
        try:
            plan = await self.subscription_repo.get_by_id(subscription_id)
            if not plan:
                return Return.err(subscription_not_found(subscription_id))

            changes = command.model_dump(exclude_none=True)

            new_status = changes.pop("status", None)
            if new_status is not None and new_status != plan.status:
                error = transition_error(plan, new_status)
                if error:
                    return Return.err(error)
                plan.status = new_status
                if new_status == SubscriptionStatus.CANCELLED and "end_date" not in changes:
                    changes["end_date"] = max(date.today(), plan.start_date)

            if "end_date" in changes and changes["end_date"] < plan.start_date:
                return Return.err(
                    Error(
                        code="INVALID_END_DATE",
                        message="end_date must not be before the plan start date",
                    )
                )

            for field, value in changes.items():
                setattr(plan, field, value)

            plan = await self.subscription_repo.update(plan)
            await self.uow.commit()

            schedules = await self.subscription_repo.get_active_schedules([plan.id])
            return Return.ok(to_subscription_response(plan, schedules[plan.id]))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_SUBSCRIPTION_FAILED",
                    message="Failed to update subscription",
                    reason=str(e),
                )
            )


class ReplaceSubscriptionSchedule:
    """
    Use Case: Swap a plan's schedule for a new set of rows

    Old rows are deactivated, not deleted. Closed plans (cancelled or
    completed) keep their last schedule.
    """

    def __init__(self, uow: UnitOfWork, subscription_repo: SubscriptionRepository):
        self.uow = uow
        self.subscription_repo = subscription_repo

    async def execute(
        self, subscription_id: int, command: ReplaceScheduleCommandDTO
    ) -> Result[SubscriptionResponseDTO]:
        try:
            # Step 1: Load plan
            plan = await self.subscription_repo.get_by_id(subscription_id)
            if not plan:
                return Return.err(subscription_not_found(subscription_id))
            if plan.is_closed:
                return Return.err(
                    Error(
                        code="INVALID_SUBSCRIPTION_STATUS",
                        message=f"Subscription {plan.id} is {plan.status.value}",
                    )
                )

            # Step 2: Validate the new rows
            schedule_error = check_schedule(plan.plan_type, command.schedule)
            if schedule_error:
                return Return.err(schedule_error)

            # Step 3: Deactivate old rows and add new ones
            replaced = await self.subscription_repo.deactivate_schedules(plan.id)
            schedule = [
                await self.subscription_repo.add_schedule(row)
                for row in build_schedule(plan.id, command.schedule, max(date.today(), plan.start_date))
            ]
            plan = await self.subscription_repo.update(plan)

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Replaced schedule of subscription {plan.id}: {replaced} rows retired, {len(schedule)} added"
            )

            return Return.ok(to_subscription_response(plan, schedule))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_SCHEDULE_FAILED",
                    message="Failed to update subscription schedule",
                    reason=str(e),
                )
            )
