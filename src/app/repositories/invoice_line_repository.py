"""Invoice Line Item Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_line import InvoiceLineItem


class InvoiceLineRepository(ABC):
    """Repository interface for invoice line items"""

    @abstractmethod
    async def create_many(self, lines: List[InvoiceLineItem]) -> List[InvoiceLineItem]:
        """
        Persist several line items at once

        Args:
            lines: Line items already linked to their invoice

        Returns:
            Created line items with generated IDs
        """
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceLineItem]:
        pass
