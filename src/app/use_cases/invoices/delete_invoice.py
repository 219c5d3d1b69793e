"""DeleteInvoice Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_allocation_repository import PaymentAllocationRepository

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete an invoice that no payment has touched

    Business Rules:
    1. Invoices referenced by any allocation cannot be deleted;
       delete the payments first
    2. Line items go with the invoice, freeing their deliveries for re-billing
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        allocation_repo: PaymentAllocationRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.allocation_repo = allocation_repo

    async def execute(self, invoice_id: int) -> Result[None]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice {invoice_id} not found",
                    )
                )

            allocation_count = await self.allocation_repo.count_by_invoice_id(invoice_id)
            if allocation_count > 0:
                return Return.err(
                    Error(
                        code="INVOICE_HAS_PAYMENTS",
                        message=f"Invoice {invoice.invoice_number} has {allocation_count} "
                                f"payment allocation(s) and cannot be deleted",
                    )
                )

            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.info(f"Deleted invoice {invoice.invoice_number}")

            return Return.ok()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
