"""SQLAlchemy Product Repository Implementation"""

from typing import Optional, List
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.product_repository import ProductRepository
from src.domain.delivery import Delivery
from src.domain.invoice_line import InvoiceLineItem
from src.domain.product import Product
from src.domain.subscription import SubscriptionPlan
from src.domain.base import utc_now


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, product: Product) -> Product:
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        statement = select(Product).where(Product.id == product_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(self, active_only: bool = False) -> List[Product]:
        statement = select(Product)
        if active_only:
            statement = statement.where(Product.is_active.is_(True))
        statement = statement.order_by(Product.product_name.asc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, product: Product) -> Product:
        product.updated_at = utc_now()
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def delete(self, product: Product) -> None:
        await self.session.delete(product)
        await self.session.flush()

    async def is_referenced(self, product_id: int) -> bool:
        for model in (SubscriptionPlan, Delivery, InvoiceLineItem):
            statement = (
                select(func.count())
                .select_from(model)
                .where(model.product_id == product_id)
            )
            result = await self.session.execute(statement)
            if result.scalar_one() > 0:
                return True
        return False
