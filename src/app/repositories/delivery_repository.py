"""Delivery Repository Interface

Defines the contract for delivery persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from dataclasses import dataclass
from typing import Optional, List, Tuple, Dict
from src.domain.customer import Customer
from src.domain.delivery import Delivery, DeliveryStatus
from src.domain.product import Product


@dataclass
class RouteStop:
    """One delivery on a route sheet"""
    delivery: Delivery
    customer: Customer
    product: Product
    area_name: str


@dataclass
class CalendarDay:
    """Delivery counts and totals for one scheduled date"""
    scheduled_date: date
    status_counts: Dict[str, int]
    total_quantity: Decimal
    total_amount: Decimal


class DeliveryRepository(ABC):
    """
    Repository interface for Delivery persistence
    """

    @abstractmethod
    async def create(self, delivery: Delivery) -> Delivery:
        pass

    @abstractmethod
    async def get_by_id(self, delivery_id: int) -> Optional[Delivery]:
        pass

    @abstractmethod
    async def update(self, delivery: Delivery) -> Delivery:
        pass

    @abstractmethod
    async def list(
        self,
        customer_id: Optional[int] = None,
        delivery_status: Optional[DeliveryStatus] = None,
        area_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Delivery], int]:
        """
        List deliveries ordered by scheduled_date

        Returns:
            Tuple of (deliveries, total count)
        """
        pass

    @abstractmethod
    async def get_uninvoiced_delivered(
        self, customer_id: int, period_start: date, period_end: date
    ) -> List[Tuple[Delivery, Product]]:
        """
        Retrieve delivered deliveries not yet billed on any invoice line

        Used by invoice generation. Ordered by scheduled_date.

        Args:
            customer_id: Customer ID
            period_start: First day of the billing period (inclusive)
            period_end: Last day of the billing period (inclusive)

        Returns:
            List of (delivery, product) pairs
        """
        pass

    @abstractmethod
    async def delete(self, delivery: Delivery) -> None:
        pass

    @abstractmethod
    async def is_invoiced(self, delivery_id: int) -> bool:
        """True if an invoice line bills this delivery"""
        pass

    @abstractmethod
    async def list_route(
        self,
        on_date: date,
        area_id: Optional[int] = None,
        delivery_status: Optional[DeliveryStatus] = None,
    ) -> List[RouteStop]:
        """
        Retrieve the deliveries of one day joined with customer and product

        Ordered by area, then customer name, which is the walking order
        used on the delivery sheet.
        """
        pass

    @abstractmethod
    async def get_calendar(
        self, start_date: date, end_date: date, area_id: Optional[int] = None
    ) -> List[CalendarDay]:
        """
        Summarize deliveries per scheduled date

        Returns:
            One CalendarDay per date that has deliveries, oldest first
        """
        pass
