"""ListDeliveries Use Case"""

from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.delivery_repository import DeliveryRepository
from src.domain.delivery import DeliveryStatus
from .delivery_lifecycle import to_delivery_response
from .dtos import DeliveryListResponseDTO


class ListDeliveries:

    def __init__(self, delivery_repo: DeliveryRepository):
        self.delivery_repo = delivery_repo

    async def execute(
        self,
        customer_id: Optional[int] = None,
        delivery_status: Optional[DeliveryStatus] = None,
        area_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[DeliveryListResponseDTO]:
        try:
            deliveries, total = await self.delivery_repo.list(
                customer_id=customer_id,
                delivery_status=delivery_status,
                area_id=area_id,
                date_from=date_from,
                date_to=date_to,
                limit=limit,
                offset=offset,
            )
            return Return.ok(
                DeliveryListResponseDTO(
                    deliveries=[to_delivery_response(d) for d in deliveries],
                    total=total,
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_DELIVERIES_FAILED",
                    message="Failed to list deliveries",
                    reason=str(e),
                )
            )
