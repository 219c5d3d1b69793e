"""Security Service Interfaces

Password hashing and access token contracts used by the auth use cases.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict
from src.domain.user import User


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass


class TokenService(ABC):
    """
    Issues and decodes signed access tokens
    """

    @abstractmethod
    def issue(self, user: User) -> str:
        """
        Issue an access token for a user

        Args:
            user: Authenticated user

        Returns:
            Encoded token string
        """
        pass

    @abstractmethod
    def decode(self, token: str) -> Dict[str, Any]:
        """
        Decode and verify a token

        Raises:
            InvalidTokenError: If the signature is invalid or the token expired
        """
        pass


class InvalidTokenError(Exception):
    """Raised when an access token cannot be trusted"""

    def __init__(self, message: str, expired: bool = False):
        super().__init__(message)
        self.expired = expired
