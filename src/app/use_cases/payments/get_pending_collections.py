"""GetPendingCollections Use Case

Customers with money still owed, for planning collection rounds.
"""

from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.repositories.report_repository import ReportRepository
from .dtos import PendingCollectionDTO


class GetPendingCollections:

    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    async def execute(self, area_id: Optional[int] = None) -> Result[List[PendingCollectionDTO]]:
        try:
            rows = await self.report_repo.get_pending_collections(area_id=area_id)

            return Return.ok(
                [
                    PendingCollectionDTO(
                        customer_id=row.customer_id,
                        customer_code=row.customer_code,
                        customer_name=row.customer_name,
                        phone=row.phone,
                        area_name=row.area_name,
                        total_pending=row.total_pending,
                        pending_invoices=row.pending_invoices,
                        oldest_due_date=row.oldest_due_date,
                    )
                    for row in rows
                ]
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="PENDING_COLLECTIONS_FAILED",
                    message="Failed to load pending collections",
                    reason=str(e),
                )
            )
