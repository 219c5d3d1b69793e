"""Delivery exception Use Cases"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.delivery_repository import DeliveryRepository
from src.app.repositories.delivery_exception_repository import DeliveryExceptionRepository
from src.domain.delivery import Delivery
from src.domain.delivery_exception import DeliveryException, DeliveryExceptionType
from .delivery_management import delivery_not_found
from .dtos import (
    DeliveryExceptionListResponseDTO,
    DeliveryExceptionResponseDTO,
    ReportExceptionCommandDTO,
)

logger = logging.getLogger(__name__)


def to_exception_response(exception: DeliveryException, delivery: Delivery) -> DeliveryExceptionResponseDTO:
    return DeliveryExceptionResponseDTO(
        exception_id=exception.id,
        delivery_id=delivery.id,
        customer_id=delivery.customer_id,
        scheduled_date=delivery.scheduled_date,
        exception_type=exception.exception_type,
        exception_notes=exception.exception_notes,
        reported_by=exception.reported_by,
        reported_at=exception.reported_at,
    )


class ReportDeliveryException:
    """
    Use Case: Record a problem with a delivery

    Reporting does not change the delivery status.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        delivery_repo: DeliveryRepository,
        exception_repo: DeliveryExceptionRepository,
    ):
        self.uow = uow
        self.delivery_repo = delivery_repo
        self.exception_repo = exception_repo

    async def execute(
        self, delivery_id: int, command: ReportExceptionCommandDTO
    ) -> Result[DeliveryExceptionResponseDTO]:
        try:
            delivery = await self.delivery_repo.get_by_id(delivery_id)
            if not delivery:
                return Return.err(delivery_not_found(delivery_id))

            exception = await self.exception_repo.create(
                DeliveryException(
                    delivery_id=delivery.id,
                    exception_type=command.exception_type,
                    exception_notes=command.exception_notes,
                    reported_by=command.reported_by,
                )
            )
            await self.uow.commit()

            logger.warning(
                f"Delivery {delivery.id} exception {exception.exception_type.value}: {exception.exception_notes}"
            )

            return Return.ok(to_exception_response(exception, delivery))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REPORT_EXCEPTION_FAILED",
                    message="Failed to report delivery exception",
                    reason=str(e),
                )
            )


class ListDeliveryExceptions:

    def __init__(self, exception_repo: DeliveryExceptionRepository):
        self.exception_repo = exception_repo

    async def execute(
        self,
        delivery_id: Optional[int] = None,
        exception_type: Optional[DeliveryExceptionType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[DeliveryExceptionListResponseDTO]:
        try:
            rows, total = await self.exception_repo.list(
                delivery_id=delivery_id,
                exception_type=exception_type,
                date_from=date_from,
                date_to=date_to,
                limit=limit,
                offset=offset,
            )
            return Return.ok(
                DeliveryExceptionListResponseDTO(
                    exceptions=[to_exception_response(exception, delivery) for exception, delivery in rows],
                    total=total,
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_EXCEPTIONS_FAILED",
                    message="Failed to list delivery exceptions",
                    reason=str(e),
                )
            )
