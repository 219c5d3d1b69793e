"""GetAgingReport Use Case"""

from datetime import date
from typing import Dict, Optional
from libs.result import Result, Return, Error
from src.app.repositories.report_repository import ReportRepository
from .aging import accumulate
from .dtos import AgingAmountsDTO, AgingReportDTO, AgingReportRowDTO


class GetAgingReport:
    """
    Use Case: Receivables aging across all customers

    One row per customer with open invoices, ordered by total outstanding
    descending, plus grand totals per bucket.
    """

    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    async def execute(
        self, area_id: Optional[int] = None, as_of: Optional[date] = None
    ) -> Result[AgingReportDTO]:
        today = as_of or date.today()
        try:
            rows = await self.report_repo.get_open_balances(area_id=area_id)

            by_customer: Dict[int, AgingReportRowDTO] = {}
            for row in rows:
                entry = by_customer.get(row.customer_id)
                if entry is None:
                    entry = AgingReportRowDTO(
                        customer_id=row.customer_id,
                        customer_code=row.customer_code,
                        customer_name=row.customer_name,
                        open_invoices=0,
                    )
                    by_customer[row.customer_id] = entry
                accumulate(entry, [(row.due_date, row.balance_amount)], today)
                entry.open_invoices += 1

            customers = sorted(
                by_customer.values(),
                key=lambda entry: (-entry.total_outstanding, entry.customer_id),
            )

            totals = AgingAmountsDTO()
            accumulate(totals, ((row.due_date, row.balance_amount) for row in rows), today)

            return Return.ok(AgingReportDTO(as_of=today, customers=customers, totals=totals))

        except Exception as e:
            return Return.err(
                Error(
                    code="AGING_REPORT_FAILED",
                    message="Failed to compute aging report",
                    reason=str(e),
                )
            )
