"""Customer Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple
from src.domain.customer import Customer, CustomerStatus


class CustomerRepository(ABC):
    """
    Repository interface for Customer persistence
    """

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[CustomerStatus] = None,
        area_id: Optional[int] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Customer], int]:
        """
        List customers with optional filters

        Args:
            status: Filter by status
            area_id: Filter by area
            search: Case-insensitive match on name, phone or customer code
            limit: Maximum number of customers to return
            offset: Offset for pagination

        Returns:
            Tuple of (customers, total count)
        """
        pass

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def delete(self, customer: Customer) -> None:
        """
        Delete a customer

        Subscriptions and deliveries cascade with the row.
        """
        pass

    @abstractmethod
    async def has_billing_history(self, customer_id: int) -> bool:
        """True if any invoice or payment belongs to the customer"""
        pass

    @abstractmethod
    async def generate_customer_code(self) -> str:
        """
        Generate a unique customer code

        Format: CUST-NNNNN
        """
        pass
