"""Delivery Exception Repository Interface"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, List, Tuple
from src.domain.delivery import Delivery
from src.domain.delivery_exception import DeliveryException, DeliveryExceptionType


class DeliveryExceptionRepository(ABC):
    """Repository interface for reported delivery problems"""

    @abstractmethod
    async def create(self, exception: DeliveryException) -> DeliveryException:
        pass

    @abstractmethod
    async def list(
        self,
        delivery_id: Optional[int] = None,
        exception_type: Optional[DeliveryExceptionType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Tuple[DeliveryException, Delivery]], int]:
        """
        List exceptions joined with their delivery, most recent first

        Date filters apply to the delivery's scheduled_date.

        Returns:
            Tuple of ((exception, delivery) pairs, total count)
        """
        pass
