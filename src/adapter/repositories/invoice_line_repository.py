"""SQLAlchemy Invoice Line Item Repository Implementation"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice_line import InvoiceLineItem


class SqlAlchemyInvoiceLineRepository(InvoiceLineRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_many(self, lines: List[InvoiceLineItem]) -> List[InvoiceLineItem]:
        self.session.add_all(lines)
        await self.session.flush()
        for line in lines:
            await self.session.refresh(line)
        return lines

    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceLineItem]:
        statement = (
            select(InvoiceLineItem)
            .where(InvoiceLineItem.invoice_id == invoice_id)
            .order_by(InvoiceLineItem.id.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
