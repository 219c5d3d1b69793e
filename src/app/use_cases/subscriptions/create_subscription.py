"""CreateSubscription Use Case"""

import logging
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.product_repository import ProductRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.customer import CustomerStatus
from src.domain.subscription import SubscriptionPlan
from .dtos import CreateSubscriptionCommandDTO, SubscriptionResponseDTO
from .mappers import build_schedule, check_schedule, to_subscription_response

logger = logging.getLogger(__name__)


class CreateSubscription:
    """
    Use Case: Start a recurring delivery plan

    Business Rules:
    1. Customer must exist and be active
    2. Product must exist and be active
    3. Every schedule row must fit the plan type, and no day may repeat
    4. Plan and schedule are stored in one transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        product_repo: ProductRepository,
        subscription_repo: SubscriptionRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.product_repo = product_repo
        self.subscription_repo = subscription_repo

    async def execute(self, command: CreateSubscriptionCommandDTO) -> Result[SubscriptionResponseDTO]:
        try:
            # Step 1: Validate references
            customer = await self.customer_repo.get_by_id(command.customer_id)
            if not customer or customer.status != CustomerStatus.ACTIVE:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Active customer {command.customer_id} not found",
                    )
                )

            product = await self.product_repo.get_by_id(command.product_id)
            if not product or not product.is_active:
                return Return.err(
                    Error(
                        code="PRODUCT_NOT_FOUND",
                        message=f"Active product {command.product_id} not found",
                    )
                )

            # Step 2: Validate schedule shape
            schedule_error = check_schedule(command.plan_type, command.schedule)
            if schedule_error:
                return Return.err(schedule_error)

            # Step 3: Create plan and schedule
            plan = await self.subscription_repo.create(
                SubscriptionPlan(
                    customer_id=customer.id,
                    product_id=product.id,
                    plan_name=command.plan_name,
                    plan_type=command.plan_type,
                    start_date=command.start_date,
                    end_date=command.end_date,
                )
            )
            schedule = [
                await self.subscription_repo.add_schedule(row)
                for row in build_schedule(plan.id, command.schedule, plan.start_date)
            ]

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Created {plan.plan_type.value} subscription {plan.id} for customer {customer.customer_code}"
            )

            return Return.ok(to_subscription_response(plan, schedule))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_SUBSCRIPTION_FAILED",
                    message="Failed to create subscription",
                    reason=str(e),
                )
            )
