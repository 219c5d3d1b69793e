"""Subscription Repository Interface

Defines the contract for subscription plan and schedule persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple, Dict
from src.domain.subscription import SubscriptionPlan, SubscriptionSchedule, SubscriptionStatus


class SubscriptionRepository(ABC):
    """
    Repository interface for SubscriptionPlan persistence
    """

    @abstractmethod
    async def create(self, plan: SubscriptionPlan) -> SubscriptionPlan:
        pass

    @abstractmethod
    async def get_by_id(self, plan_id: int) -> Optional[SubscriptionPlan]:
        pass

    @abstractmethod
    async def list(
        self,
        customer_id: Optional[int] = None,
        product_id: Optional[int] = None,
        status: Optional[SubscriptionStatus] = None,
        area_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[SubscriptionPlan], int]:
        """
        List subscription plans, newest first

        Args:
            customer_id: Filter by customer
            product_id: Filter by product
            status: Filter by status
            area_id: Filter by the customer's area

        Returns:
            Tuple of (plans, total count)
        """
        pass

    @abstractmethod
    async def update(self, plan: SubscriptionPlan) -> SubscriptionPlan:
        pass

    @abstractmethod
    async def delete(self, plan: SubscriptionPlan) -> None:
        pass

    @abstractmethod
    async def add_schedule(self, schedule: SubscriptionSchedule) -> SubscriptionSchedule:
        pass

    @abstractmethod
    async def get_active_schedules(self, plan_ids: List[int]) -> Dict[int, List[SubscriptionSchedule]]:
        """
        Retrieve active schedule rows for several plans

        Returns:
            Mapping of plan id to its active rows; plans without rows map to []
        """
        pass

    @abstractmethod
    async def deactivate_schedules(self, plan_id: int) -> int:
        """
        Mark every active schedule row of a plan inactive

        Returns:
            Number of rows deactivated
        """
        pass
