"""Payment Allocation Repository Interface

Defines the contract for payment allocation persistence.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple
from src.domain.invoice import Invoice
from src.domain.payment import Payment
from src.domain.payment_allocation import PaymentAllocation


class PaymentAllocationRepository(ABC):
    """
    Repository interface for PaymentAllocation persistence
    """

    @abstractmethod
    async def create(self, allocation: PaymentAllocation) -> PaymentAllocation:
        """
        Create a new allocation

        Args:
            allocation: PaymentAllocation linking a payment to an invoice

        Returns:
            Created PaymentAllocation with generated ID
        """
        pass

    @abstractmethod
    async def get_by_payment_id(self, payment_id: int) -> List[PaymentAllocation]:
        pass

    @abstractmethod
    async def get_with_invoices_by_payment_id(
        self, payment_id: int
    ) -> List[Tuple[PaymentAllocation, Invoice]]:
        """
        Retrieve a payment's allocations joined with their invoices

        Args:
            payment_id: Payment ID

        Returns:
            List of (allocation, invoice) pairs
        """
        pass

    @abstractmethod
    async def get_with_payments_by_invoice_id(
        self, invoice_id: int
    ) -> List[Tuple[PaymentAllocation, Payment]]:
        """
        Retrieve allocations applied to an invoice joined with their payments

        Ordered by payment_date descending.
        """
        pass

    @abstractmethod
    async def count_by_invoice_id(self, invoice_id: int) -> int:
        pass
