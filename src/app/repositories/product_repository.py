"""Product Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.product import Product


class ProductRepository(ABC):
    """Repository interface for the product catalog"""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        pass

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    async def list(self, active_only: bool = False) -> List[Product]:
        pass

    @abstractmethod
    async def update(self, product: Product) -> Product:
        pass

    @abstractmethod
    async def delete(self, product: Product) -> None:
        pass

    @abstractmethod
    async def is_referenced(self, product_id: int) -> bool:
        """
        Check whether subscriptions, deliveries or invoice lines use a product

        Returns:
            True if any row references the product
        """
        pass
