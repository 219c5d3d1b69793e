"""Payment Repository Interface

Defines the contract for payment persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, List, Tuple
from src.domain.payment import Payment, PaymentMethod, PaymentStatus


class PaymentRepository(ABC):
    """
    Repository interface for Payment persistence
    """

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: int) -> Optional[Payment]:
        """
        Retrieve payment by ID

        Args:
            payment_id: Payment ID

        Returns:
            Payment if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        customer_id: Optional[int] = None,
        payment_method: Optional[PaymentMethod] = None,
        payment_status: Optional[PaymentStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Payment], int]:
        """
        List payments, most recent payment_date first

        Returns:
            Tuple of (payments, total count)
        """
        pass

    @abstractmethod
    async def update(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def delete(self, payment: Payment) -> None:
        """
        Delete a payment

        Its allocations are removed by the store (ON DELETE CASCADE).
        """
        pass

    @abstractmethod
    async def generate_payment_code(self) -> str:
        """
        Generate a unique payment code

        Format: PAY-YYYY-NNNNNN
        """
        pass
