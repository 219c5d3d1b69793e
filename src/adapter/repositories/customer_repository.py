"""SQLAlchemy Customer Repository Implementation"""

from typing import Optional, List, Tuple
from sqlmodel import select, func, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import Customer, CustomerStatus
from src.domain.invoice import Invoice
from src.domain.payment import Payment
from src.domain.base import utc_now


class SqlAlchemyCustomerRepository(CustomerRepository):
    """
    SQLAlchemy implementation of CustomerRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, customer: Customer) -> Customer:
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        statement = select(Customer).where(Customer.id == customer_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(
        self,
        status: Optional[CustomerStatus] = None,
        area_id: Optional[int] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Customer], int]:
        filters = []
        if status:
            filters.append(Customer.status == status)
        if area_id is not None:
            filters.append(Customer.area_id == area_id)
        if search:
            pattern = f"%{search}%"
            filters.append(
                or_(
                    Customer.full_name.ilike(pattern),
                    Customer.phone.ilike(pattern),
                    Customer.customer_code.ilike(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(Customer).where(*filters)
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar()

        statement = (
            select(Customer)
            .where(*filters)
            .order_by(Customer.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, customer: Customer) -> Customer:
        customer.updated_at = utc_now()
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def delete(self, customer: Customer) -> None:
        await self.session.delete(customer)
        await self.session.flush()

    async def has_billing_history(self, customer_id: int) -> bool:
        for model in (Invoice, Payment):
            statement = (
                select(func.count())
                .select_from(model)
                .where(model.customer_id == customer_id)
            )
            result = await self.session.execute(statement)
            if result.scalar_one() > 0:
                return True
        return False

    async def generate_customer_code(self) -> str:
        statement = select(func.max(Customer.customer_code)).where(
            Customer.customer_code.like("CUST-%")
        )
        result = await self.session.execute(statement)
        max_code = result.scalar_one_or_none()

        sequence = int(max_code.split("-")[-1]) + 1 if max_code else 1
        return f"CUST-{sequence:05d}"
