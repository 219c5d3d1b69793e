"""Area Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.area import Area


class AreaRepository(ABC):
    """Repository interface for delivery areas"""

    @abstractmethod
    async def create(self, area: Area) -> Area:
        pass

    @abstractmethod
    async def get_by_id(self, area_id: int) -> Optional[Area]:
        pass

    @abstractmethod
    async def list(self, active_only: bool = False) -> List[Area]:
        pass

    @abstractmethod
    async def update(self, area: Area) -> Area:
        pass

    @abstractmethod
    async def delete(self, area: Area) -> None:
        pass

    @abstractmethod
    async def count_customers(self, area_id: int) -> int:
        """Count customers of any status living in an area"""
        pass
