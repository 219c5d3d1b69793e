"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.base import utc_now


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations. Row locks requested with
    for_update are rendered as SELECT ... FOR UPDATE on dialects that support it.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        statement = select(Invoice).where(Invoice.id == invoice_id)

        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_open_by_customer_id(self, customer_id: int, for_update: bool = False) -> List[Invoice]:
        """
        Retrieve a customer's invoices with an outstanding balance

        Args:
            customer_id: Customer ID
            for_update: If True, locks the rows with SELECT FOR UPDATE

        Returns:
            Invoices ordered by due_date ascending, then id
        """
        statement = (
            select(Invoice)
            .where(Invoice.customer_id == customer_id)
            .where(Invoice.balance_amount > 0)
            .where(Invoice.status != InvoiceStatus.CANCELLED)
            .order_by(Invoice.due_date.asc(), Invoice.id.asc())
        )

        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list(
        self,
        customer_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        filters = []
        if customer_id is not None:
            filters.append(Invoice.customer_id == customer_id)
        if status:
            filters.append(Invoice.status == status)

        count_stmt = select(func.count()).select_from(Invoice).where(*filters)
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar()

        statement = (
            select(Invoice)
            .where(*filters)
            .order_by(Invoice.invoice_date.desc(), Invoice.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def generate_invoice_number(self) -> str:
        """
        Generate a unique invoice number

        Format: INV-YYYY-NNNNNN (e.g., INV-2024-000001)

        Returns:
            Unique invoice number string
        """
        year = utc_now().year
        prefix = f"INV-{year}-"

        # Get the highest invoice number for this year
        statement = (
            select(func.max(Invoice.invoice_number))
            .where(Invoice.invoice_number.like(f"{prefix}%"))
        )
        result = await self.session.execute(statement)
        max_number = result.scalar_one_or_none()

        if max_number:
            # Extract the sequence number and increment
            sequence = int(max_number.split("-")[-1]) + 1
        else:
            sequence = 1

        return f"{prefix}{sequence:06d}"
