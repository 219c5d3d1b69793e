"""GetInvoice Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.payment_allocation_repository import PaymentAllocationRepository
from .dtos import InvoiceDetailResponseDTO, InvoicePaymentDTO
from .mappers import invoice_fields, to_line_response


class GetInvoice:
    """
    Use Case: Retrieve an invoice with its line items and applied payments
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_repo: InvoiceLineRepository,
        allocation_repo: PaymentAllocationRepository,
    ):
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.allocation_repo = allocation_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceDetailResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice {invoice_id} not found",
                    )
                )

            lines = await self.line_repo.get_by_invoice_id(invoice_id)
            applied = await self.allocation_repo.get_with_payments_by_invoice_id(invoice_id)

            return Return.ok(
                InvoiceDetailResponseDTO(
                    **invoice_fields(invoice),
                    lines=[to_line_response(line) for line in lines],
                    payments=[
                        InvoicePaymentDTO(
                            allocation_id=allocation.id,
                            payment_id=payment.id,
                            payment_code=payment.payment_code,
                            payment_date=payment.payment_date,
                            payment_method=payment.payment_method,
                            allocated_amount=allocation.allocated_amount,
                        )
                        for allocation, payment in applied
                    ],
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_FAILED",
                    message="Failed to retrieve invoice",
                    reason=str(e),
                )
            )
