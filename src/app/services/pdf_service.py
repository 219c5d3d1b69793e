"""PDF Generation Service Interface

Defines the contract for rendering invoices as PDF documents.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.customer import Customer
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLineItem


class PdfService(ABC):
    """
    Service interface for PDF generation
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        customer: Customer,
        lines: List[InvoiceLineItem],
        company_name: str,
        company_address: str,
        currency: str,
    ) -> bytes:
        """
        Render a customer invoice

        Args:
            invoice: Invoice with amounts and dates
            customer: Billed customer
            lines: Line items of the invoice
            company_name: Seller name printed in the header
            company_address: Seller address printed in the header
            currency: Currency code shown next to amounts

        Returns:
            PDF document as bytes
        """
        pass
