"""User Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.user import User


class UserRepository(ABC):
    """Repository interface for staff accounts"""

    @abstractmethod
    async def create(self, user: User) -> User:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def exists_by_email_or_phone(self, email: str, phone: str) -> bool:
        """
        Check whether an account already uses this email or phone

        Args:
            email: Email address
            phone: Phone number

        Returns:
            True if either is taken, False otherwise
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        pass
