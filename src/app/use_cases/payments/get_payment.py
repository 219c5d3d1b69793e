"""GetPayment Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.payment_allocation_repository import PaymentAllocationRepository
from .dtos import PaymentResponseDTO
from .mappers import to_payment_response


class GetPayment:
    """
    Use Case: Retrieve a payment with its allocations

    Allocations are joined with their invoices so the response carries
    invoice numbers and totals.
    """

    def __init__(
        self,
        payment_repo: PaymentRepository,
        allocation_repo: PaymentAllocationRepository,
    ):
        self.payment_repo = payment_repo
        self.allocation_repo = allocation_repo

    async def execute(self, payment_id: int) -> Result[PaymentResponseDTO]:
        try:
            payment = await self.payment_repo.get_by_id(payment_id)
            if not payment:
                return Return.err(
                    Error(
                        code="PAYMENT_NOT_FOUND",
                        message=f"Payment {payment_id} not found",
                    )
                )

            allocations = await self.allocation_repo.get_with_invoices_by_payment_id(payment_id)

            return Return.ok(to_payment_response(payment, allocations))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_PAYMENT_FAILED",
                    message="Failed to retrieve payment",
                    reason=str(e),
                )
            )
