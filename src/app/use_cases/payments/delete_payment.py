"""DeletePayment Use Case

Removes a payment and undoes everything it did to the customer's invoices.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.payment_allocation_repository import PaymentAllocationRepository

logger = logging.getLogger(__name__)


class DeletePayment:
    """
    Use Case: Delete a payment and reverse its allocations

    Business Rules:
    1. Each allocation's amount is subtracted from its invoice's paid_amount
       and the invoice balance / status recomputed
    2. Allocations are removed with the payment
    3. Reversal and deletion commit together or not at all

    Flow:
    1. Load payment (404 if absent)
    2. Load allocations
    3. Reverse each allocation on its invoice (with row lock)
    4. Delete payment (allocations cascade)
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: PaymentRepository,
        allocation_repo: PaymentAllocationRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.allocation_repo = allocation_repo

    async def execute(self, payment_id: int) -> Result[int]:
        """
        Execute payment deletion

        Args:
            payment_id: Payment to delete

        Returns:
            Result[int]: Number of allocations reversed, or error
        """
        try:
            # Step 1: Load payment
            payment = await self.payment_repo.get_by_id(payment_id)
            if not payment:
                return Return.err(
                    Error(
                        code="PAYMENT_NOT_FOUND",
                        message=f"Payment {payment_id} not found",
                    )
                )

            # Step 2: Load allocations
            allocations = await self.allocation_repo.get_by_payment_id(payment_id)

            # Step 3: Reverse allocations on their invoices
            for allocation in allocations:
                invoice = await self.invoice_repo.get_by_id(allocation.invoice_id, for_update=True)
                if not invoice:
                    raise RuntimeError(
                        f"Allocation {allocation.id} references missing invoice {allocation.invoice_id}"
                    )
                invoice.reverse_payment(allocation.allocated_amount)
                await self.invoice_repo.update(invoice)

            # Step 4: Delete payment
            await self.payment_repo.delete(payment)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Deleted payment {payment.payment_code}, reversed {len(allocations)} allocation(s)"
            )

            return Return.ok(len(allocations))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete payment {payment_id}: {e}")
            return Return.err(
                Error(
                    code="DELETE_PAYMENT_FAILED",
                    message="Failed to delete payment",
                    reason=str(e),
                )
            )
