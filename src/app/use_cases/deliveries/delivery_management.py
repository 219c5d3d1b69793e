"""Get, update and delete a single delivery"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.delivery_repository import DeliveryRepository
from src.app.repositories.product_repository import ProductRepository
from src.domain.delivery import DeliveryStatus
from .delivery_lifecycle import OPEN_STATUSES, delivery_amount, to_delivery_response
from .dtos import DeliveryResponseDTO, UpdateDeliveryCommandDTO

# Statuses an open delivery may be moved to through an update
EDITABLE_STATUSES = OPEN_STATUSES + (DeliveryStatus.CANCELLED,)


def delivery_not_found(delivery_id: int) -> Error:
    return Error(code="DELIVERY_NOT_FOUND", message=f"Delivery {delivery_id} not found")


class GetDelivery:

    def __init__(self, delivery_repo: DeliveryRepository):
        self.delivery_repo = delivery_repo

    async def execute(self, delivery_id: int) -> Result[DeliveryResponseDTO]:
        try:
            delivery = await self.delivery_repo.get_by_id(delivery_id)
            if not delivery:
                return Return.err(delivery_not_found(delivery_id))
            return Return.ok(to_delivery_response(delivery))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_DELIVERY_FAILED",
                    message="Failed to retrieve delivery",
                    reason=str(e),
                )
            )


class UpdateDelivery:
    """
    Use Case: Reschedule, resize, dispatch or cancel an open delivery

    Business Rules:
    1. Notes and customer feedback can change at any time
    2. Date, quantity and status change only while the delivery is open
    3. Status may move between scheduled, out_for_delivery and cancelled;
       delivered and missed go through their own actions
    4. A new quantity re-prices the delivery at the current catalog price
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
        self, delivery_id: int, command: UpdateDeliveryCommandDTO
    ) -> Result[DeliveryResponseDTO]:
        try:
            delivery = await self.delivery_repo.get_by_id(delivery_id)
            if not delivery:
                return Return.err(delivery_not_found(delivery_id))

            changes = command.model_dump(exclude_none=True)
            scheduling = {"scheduled_date", "scheduled_quantity", "delivery_status"} & changes.keys()

            if scheduling and delivery.delivery_status not in OPEN_STATUSES:
                return Return.err(
                    Error(
                        code="INVALID_DELIVERY_STATUS",
                        message=f"Delivery {delivery_id} is {delivery.delivery_status.value} and can no longer be rescheduled",
                    )
                )

            new_status = changes.get("delivery_status")
            if new_status is not None and new_status not in EDITABLE_STATUSES:
                return Return.err(
                    Error(
                        code="INVALID_DELIVERY_STATUS",
                        message=f"Use the {new_status.value} action to close a delivery",
                    )
                )

            if "scheduled_quantity" in changes:
                product = await self.product_repo.get_by_id(delivery.product_id)
                delivery.amount = delivery_amount(changes["scheduled_quantity"], product.price_per_unit)

            for field, value in changes.items():
                setattr(delivery, field, value)

            delivery = await self.delivery_repo.update(delivery)
            await self.uow.commit()
            return Return.ok(to_delivery_response(delivery))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_DELIVERY_FAILED",
                    message="Failed to update delivery",
                    reason=str(e),
                )
            )


class DeleteDelivery:
    """
    Use Case: Delete a delivery

    A delivery billed on an invoice line stays; delete the invoice first.
    """

    def __init__(self, uow: UnitOfWork, delivery_repo: DeliveryRepository):
        self.uow = uow
        self.delivery_repo = delivery_repo

    async def execute(self, delivery_id: int) -> Result[None]:
        try:
            delivery = await self.delivery_repo.get_by_id(delivery_id)
            if not delivery:
                return Return.err(delivery_not_found(delivery_id))

            if await self.delivery_repo.is_invoiced(delivery_id):
                return Return.err(
                    Error(
                        code="DELIVERY_INVOICED",
                        message=f"Delivery {delivery_id} is billed on an invoice",
                    )
                )

            await self.delivery_repo.delete(delivery)
            await self.uow.commit()
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_DELIVERY_FAILED",
                    message="Failed to delete delivery",
                    reason=str(e),
                )
            )
