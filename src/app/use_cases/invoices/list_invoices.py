"""ListInvoices Use Case"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceListResponseDTO
from .mappers import to_invoice_response


class ListInvoices:

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        customer_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[InvoiceListResponseDTO]:
        try:
            invoices, total = await self.invoice_repo.list(
                customer_id=customer_id,
                status=status,
                limit=limit,
                offset=offset,
            )

            return Return.ok(
                InvoiceListResponseDTO(
                    invoices=[to_invoice_response(invoice) for invoice in invoices],
                    total=total,
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_INVOICES_FAILED",
                    message="Failed to list invoices",
                    reason=str(e),
                )
            )
