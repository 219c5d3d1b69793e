"""RenderInvoicePdf Use Case"""

from libs.result import Result, Return, Error
from src.app.services.pdf_service import PdfService
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository


class RenderInvoicePdf:
    """
    Use Case: Render an invoice as a PDF document

    Returns the raw PDF bytes; the caller decides how to ship them.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_repo: InvoiceLineRepository,
        customer_repo: CustomerRepository,
        pdf_service: PdfService,
        company_name: str,
        company_address: str,
        currency: str,
    ):
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.customer_repo = customer_repo
        self.pdf_service = pdf_service
        self.company_name = company_name
        self.company_address = company_address
        self.currency = currency

    async def execute(self, invoice_id: int) -> Result[bytes]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice {invoice_id} not found",
                    )
                )

            customer = await self.customer_repo.get_by_id(invoice.customer_id)
            lines = await self.line_repo.get_by_invoice_id(invoice_id)

            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                customer=customer,
                lines=lines,
                company_name=self.company_name,
                company_address=self.company_address,
                currency=self.currency,
            )

            return Return.ok(pdf_bytes)

        except Exception as e:
            return Return.err(
                Error(
                    code="RENDER_INVOICE_FAILED",
                    message="Failed to render invoice PDF",
                    reason=str(e),
                )
            )
