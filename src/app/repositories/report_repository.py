"""Report Repository Interface

Read-only aggregation queries for the reporting screens.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, List, Dict


@dataclass
class OpenBalanceRow:
    """One open invoice with the customer it belongs to"""
    customer_id: int
    customer_code: str
    customer_name: str
    area_id: int
    invoice_id: int
    due_date: date
    balance_amount: Decimal


@dataclass
class PendingCollectionRow:
    """Outstanding totals for one customer"""
    customer_id: int
    customer_code: str
    customer_name: str
    phone: str
    area_name: str
    total_pending: Decimal
    pending_invoices: int
    oldest_due_date: date


@dataclass
class DeliveryTotals:
    """Delivery volume and revenue over a period"""
    total_deliveries: int
    completed_deliveries: int
    total_revenue: Decimal
    total_quantity_delivered: Decimal


@dataclass
class DeliveryReportRow:
    """
    Delivery counts for one day, optionally split by area or person

    group_id and group_name are None when grouping by date only; for
    person grouping a None group_id means nobody recorded the drop.
    """
    scheduled_date: date
    group_id: Optional[int]
    group_name: Optional[str]
    total_deliveries: int
    completed: int
    missed: int
    cancelled: int
    total_quantity_scheduled: Decimal
    total_quantity_delivered: Decimal
    total_amount: Decimal


@dataclass
class TopCustomerRow:
    customer_id: int
    customer_code: str
    customer_name: str
    phone: str
    area_name: str
    total_deliveries: int
    total_revenue: Decimal
    active_subscriptions: int


@dataclass
class ProductPopularityRow:
    product_id: int
    product_code: str
    product_name: str
    total_orders: int
    total_quantity_sold: Decimal
    total_revenue: Decimal


class ReportRepository(ABC):
    """
    Repository interface for reporting queries

    All methods are read-only.
    """

    @abstractmethod
    async def get_open_balances(
        self, customer_id: Optional[int] = None, area_id: Optional[int] = None
    ) -> List[OpenBalanceRow]:
        """
        Retrieve every invoice with balance_amount > 0

        Args:
            customer_id: Restrict to one customer
            area_id: Restrict to customers of one area

        Returns:
            Open invoice rows ordered by customer, then due_date
        """
        pass

    @abstractmethod
    async def get_pending_collections(self, area_id: Optional[int] = None) -> List[PendingCollectionRow]:
        """
        Sum open balances per customer

        Returns:
            Rows ordered by total_pending descending
        """
        pass

    @abstractmethod
    async def get_delivery_counts(self, on_date: date) -> Dict[str, int]:
        """Count deliveries scheduled on a date, keyed by delivery status value"""
        pass

    @abstractmethod
    async def get_delivered_revenue(self, on_date: date) -> Decimal:
        pass

    @abstractmethod
    async def get_payment_totals(self, on_date: date) -> Dict[str, Decimal]:
        """Return {"count": n, "total": amount} of completed payments on a date"""
        pass

    @abstractmethod
    async def count_active_customers(self) -> int:
        pass

    @abstractmethod
    async def count_active_areas(self) -> int:
        pass

    @abstractmethod
    async def get_delivery_totals(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> DeliveryTotals:
        """Totals over deliveries scheduled in the period; revenue counts delivered only"""
        pass

    @abstractmethod
    async def get_payment_totals_by_method(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> Dict[str, Decimal]:
        """Sum completed payments in the period keyed by payment method value"""
        pass

    @abstractmethod
    async def count_payments(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> int:
        """Count completed payments in the period"""
        pass

    @abstractmethod
    async def get_active_subscription_counts(self) -> Dict[str, int]:
        """Count active subscription plans keyed by plan type value"""
        pass

    @abstractmethod
    async def get_delivery_report(
        self,
        group_by: str = "date",
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        area_id: Optional[int] = None,
    ) -> List[DeliveryReportRow]:
        """
        Aggregate deliveries per scheduled date

        Args:
            group_by: "date", "area" (also split by area) or "person"
                (also split by the user who recorded the outcome)

        Returns:
            Rows ordered by scheduled_date descending, then group name
        """
        pass

    @abstractmethod
    async def get_customer_status_counts(self, area_id: Optional[int] = None) -> Dict[str, int]:
        """Count customers keyed by status value"""
        pass

    @abstractmethod
    async def get_joining_dates(self, area_id: Optional[int] = None) -> List[date]:
        pass

    @abstractmethod
    async def get_top_customers(
        self, area_id: Optional[int] = None, limit: int = 10
    ) -> List[TopCustomerRow]:
        """Customers ordered by delivered revenue, highest first"""
        pass

    @abstractmethod
    async def get_product_popularity(self, area_id: Optional[int] = None) -> List[ProductPopularityRow]:
        """Products with deliveries, ordered by delivered revenue"""
        pass
