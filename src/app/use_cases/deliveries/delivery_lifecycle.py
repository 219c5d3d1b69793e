"""Delivery lifecycle Use Cases

Scheduling, completion and missed drops. Completed deliveries become
billable through invoice generation.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.delivery_repository import DeliveryRepository
from src.app.repositories.product_repository import ProductRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.customer import CustomerStatus
from src.domain.delivery import Delivery, DeliveryStatus
from src.domain.base import utc_now
from .dtos import (
    ScheduleDeliveryCommandDTO,
    CompleteDeliveryCommandDTO,
    MarkMissedCommandDTO,
    DeliveryResponseDTO,
)

logger = logging.getLogger(__name__)

OPEN_STATUSES = (DeliveryStatus.SCHEDULED, DeliveryStatus.OUT_FOR_DELIVERY)


def delivery_amount(quantity: Decimal, price_per_unit: Decimal) -> Decimal:
    return (quantity * price_per_unit).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def to_delivery_response(delivery: Delivery) -> DeliveryResponseDTO:
    return DeliveryResponseDTO(
        delivery_id=delivery.id,
        customer_id=delivery.customer_id,
        product_id=delivery.product_id,
        scheduled_date=delivery.scheduled_date,
        scheduled_quantity=delivery.scheduled_quantity,
        delivered_quantity=delivery.delivered_quantity,
        amount=delivery.amount,
        delivery_status=delivery.delivery_status,
        subscription_plan_id=delivery.subscription_plan_id,
        delivery_notes=delivery.delivery_notes,
        customer_feedback=delivery.customer_feedback,
        delivered_at=delivery.delivered_at,
        delivered_by=delivery.delivered_by,
    )


class ScheduleDelivery:
    """
    Use Case: Schedule a product drop for a customer

    Business Rules:
    1. Customer must be active
    2. Product must exist and be active
    3. amount = price_per_unit * quantity, rounded to cents
    4. A linked subscription must belong to the same customer and product
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        product_repo: ProductRepository,
        delivery_repo: DeliveryRepository,
        subscription_repo: SubscriptionRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.product_repo = product_repo
        self.delivery_repo = delivery_repo
        self.subscription_repo = subscription_repo

    async def execute(self, command: ScheduleDeliveryCommandDTO) -> Result[DeliveryResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(command.customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {command.customer_id} not found",
                    )
                )
            if customer.status != CustomerStatus.ACTIVE:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_ACTIVE",
                        message=f"Customer {customer.customer_code} is {customer.status.value}",
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

            if command.subscription_plan_id is not None:
                plan = await self.subscription_repo.get_by_id(command.subscription_plan_id)
                if (
                    not plan
                    or plan.customer_id != customer.id
                    or plan.product_id != product.id
                ):
                    return Return.err(
                        Error(
                            code="SUBSCRIPTION_NOT_FOUND",
                            message=f"Subscription {command.subscription_plan_id} not found for this customer and product",
                        )
                    )

            delivery = await self.delivery_repo.create(
                Delivery(
                    customer_id=customer.id,
                    product_id=product.id,
                    scheduled_date=command.scheduled_date,
                    scheduled_quantity=command.quantity,
                    amount=delivery_amount(command.quantity, product.price_per_unit),
                    subscription_plan_id=command.subscription_plan_id,
                    delivery_notes=command.notes,
                )
            )
            await self.uow.commit()

            return Return.ok(to_delivery_response(delivery))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SCHEDULE_DELIVERY_FAILED",
                    message="Failed to schedule delivery",
                    reason=str(e),
                )
            )


class CompleteDelivery:
    """
    Use Case: Mark a delivery as delivered

    The amount is recomputed from the delivered quantity at the current
    catalog price. Only scheduled or out-for-delivery drops can complete.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        product_repo: ProductRepository,
        delivery_repo: DeliveryRepository,
    ):
        self.uow = uow
        self.product_repo = product_repo
        self.delivery_repo = delivery_repo

    async def execute(
        self, delivery_id: int, command: CompleteDeliveryCommandDTO
    ) -> Result[DeliveryResponseDTO]:
        try:
            delivery = await self.delivery_repo.get_by_id(delivery_id)
            if not delivery:
                return Return.err(
                    Error(
                        code="DELIVERY_NOT_FOUND",
                        message=f"Delivery {delivery_id} not found",
                    )
                )
            if delivery.delivery_status not in OPEN_STATUSES:
                return Return.err(
                    Error(
                        code="INVALID_DELIVERY_STATUS",
                        message=f"Delivery {delivery_id} is already {delivery.delivery_status.value}",
                    )
                )

            product = await self.product_repo.get_by_id(delivery.product_id)
            quantity = command.delivered_quantity or delivery.scheduled_quantity

            delivery.delivered_quantity = quantity
            delivery.amount = delivery_amount(quantity, product.price_per_unit)
            delivery.delivery_status = DeliveryStatus.DELIVERED
            delivery.delivered_at = utc_now()
            delivery.delivered_by = command.delivered_by
            if command.notes is not None:
                delivery.delivery_notes = command.notes
            if command.customer_feedback is not None:
                delivery.customer_feedback = command.customer_feedback

            delivery = await self.delivery_repo.update(delivery)
            await self.uow.commit()

            logger.info(f"Delivery {delivery.id} delivered: {quantity} for {delivery.amount}")

            return Return.ok(to_delivery_response(delivery))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="COMPLETE_DELIVERY_FAILED",
                    message="Failed to complete delivery",
                    reason=str(e),
                )
            )


class MarkDeliveryMissed:

    def __init__(self, uow: UnitOfWork, delivery_repo: DeliveryRepository):
        self.uow = uow
        self.delivery_repo = delivery_repo

    async def execute(
        self, delivery_id: int, command: Optional[MarkMissedCommandDTO] = None
    ) -> Result[DeliveryResponseDTO]:
        try:
            delivery = await self.delivery_repo.get_by_id(delivery_id)
            if not delivery:
                return Return.err(
                    Error(
                        code="DELIVERY_NOT_FOUND",
                        message=f"Delivery {delivery_id} not found",
                    )
                )
            if delivery.delivery_status not in OPEN_STATUSES:
                return Return.err(
                    Error(
                        code="INVALID_DELIVERY_STATUS",
                        message=f"Delivery {delivery_id} is already {delivery.delivery_status.value}",
                    )
                )

            delivery.delivery_status = DeliveryStatus.MISSED
            if command is not None:
                delivery.delivered_by = command.delivered_by
                if command.notes is not None:
                    delivery.delivery_notes = command.notes

            delivery = await self.delivery_repo.update(delivery)
            await self.uow.commit()

            return Return.ok(to_delivery_response(delivery))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_MISSED_FAILED",
                    message="Failed to mark delivery missed",
                    reason=str(e),
                )
            )
