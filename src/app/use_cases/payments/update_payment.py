"""UpdatePayment Use Case

Edits bookkeeping fields of a payment. Amount, customer and allocations
cannot change; delete and re-record the payment for that.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.payment_allocation_repository import PaymentAllocationRepository
from src.domain.payment import PaymentStatus
from .dtos import UpdatePaymentCommandDTO, PaymentResponseDTO
from .mappers import to_payment_response

# Statuses meaning the money is not held; allocations would overstate invoice payments
UNSETTLED_STATUSES = (PaymentStatus.FAILED, PaymentStatus.REFUNDED)


class UpdatePayment:
    """
    Use Case: Update payment status, reference or notes

    A payment still allocated to invoices cannot become failed or
    refunded; DELETE the payment instead, which reverses its allocations.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        payment_repo: PaymentRepository,
        allocation_repo: PaymentAllocationRepository,
    ):
        self.uow = uow
        self.payment_repo = payment_repo
        self.allocation_repo = allocation_repo

    async def execute(
        self, payment_id: int, command: UpdatePaymentCommandDTO
    ) -> Result[PaymentResponseDTO]:
        try:
            payment = await self.payment_repo.get_by_id(payment_id)
            if not payment:
                return Return.err(
                    Error(
                        code="PAYMENT_NOT_FOUND",
                        message=f"Payment {payment_id} not found",
                    )
                )

            if command.payment_status in UNSETTLED_STATUSES:
                allocations = await self.allocation_repo.get_by_payment_id(payment_id)
                if allocations:
                    return Return.err(
                        Error(
                            code="PAYMENT_HAS_ALLOCATIONS",
                            message=(
                                f"Payment {payment.payment_code} is applied to "
                                f"{len(allocations)} invoice(s); delete it to reverse them"
                            ),
                            reason=f"payment_status={command.payment_status.value}",
                        )
                    )

            if command.payment_status is not None:
                payment.payment_status = command.payment_status
            if command.transaction_reference is not None:
                payment.transaction_reference = command.transaction_reference
            if command.notes is not None:
                payment.notes = command.notes

            payment = await self.payment_repo.update(payment)
            await self.uow.commit()

            return Return.ok(to_payment_response(payment))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_PAYMENT_FAILED",
                    message="Failed to update payment",
                    reason=str(e),
                )
            )
