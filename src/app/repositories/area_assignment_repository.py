"""Area Assignment Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple
from src.domain.area_assignment import AreaAssignment
from src.domain.user import User


class AreaAssignmentRepository(ABC):
    """Repository interface for delivery staff assigned to areas"""

    @abstractmethod
    async def create(self, assignment: AreaAssignment) -> AreaAssignment:
        pass

    @abstractmethod
    async def get_by_id(self, assignment_id: int) -> Optional[AreaAssignment]:
        pass

    @abstractmethod
    async def get_active(self, area_id: int, user_id: int) -> Optional[AreaAssignment]:
        pass

    @abstractmethod
    async def list_active_for_area(self, area_id: int) -> List[Tuple[AreaAssignment, User]]:
        """Active assignments of an area joined with the assigned user, by name"""
        pass

    @abstractmethod
    async def update(self, assignment: AreaAssignment) -> AreaAssignment:
        pass
