"""ListPayments Use Case"""

from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import PaymentMethod, PaymentStatus
from .dtos import PaymentListResponseDTO
from .mappers import to_payment_response


class ListPayments:
    """
    Use Case: List payments with filters and pagination

    Allocation details are not loaded; use GetPayment for those.
    """

    def __init__(self, payment_repo: PaymentRepository):
        self.payment_repo = payment_repo

    async def execute(
        self,
        customer_id: Optional[int] = None,
        payment_method: Optional[PaymentMethod] = None,
        payment_status: Optional[PaymentStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[PaymentListResponseDTO]:
        try:
            payments, total = await self.payment_repo.list(
                customer_id=customer_id,
                payment_method=payment_method,
                payment_status=payment_status,
                date_from=date_from,
                date_to=date_to,
                limit=limit,
                offset=offset,
            )

            return Return.ok(
                PaymentListResponseDTO(
                    payments=[to_payment_response(p) for p in payments],
                    total=total,
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_PAYMENTS_FAILED",
                    message="Failed to list payments",
                    reason=str(e),
                )
            )
