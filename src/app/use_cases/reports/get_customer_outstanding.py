"""GetCustomerOutstanding Use Case

Reports what a customer owes, split into aging buckets.
"""

from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.report_repository import ReportRepository
from .aging import accumulate
from .dtos import CustomerOutstandingDTO


class GetCustomerOutstanding:
    """
    Use Case: Outstanding balance of one customer

    Business Rules:
    1. Only invoices with balance > 0 that are not cancelled count
    2. Each invoice lands in exactly one bucket by days past due:
       <= 0 current, 1-30, 31-60, 61-90, > 90
    3. A customer with no open invoices gets all zeros
    """

    def __init__(self, customer_repo: CustomerRepository, report_repo: ReportRepository):
        self.customer_repo = customer_repo
        self.report_repo = report_repo

    async def execute(
        self, customer_id: int, as_of: Optional[date] = None
    ) -> Result[CustomerOutstandingDTO]:
        """
        Args:
            customer_id: Customer to report on
            as_of: Reference date for aging, today when omitted
        """
        today = as_of or date.today()
        try:
            customer = await self.customer_repo.get_by_id(customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {customer_id} not found",
                    )
                )

            rows = await self.report_repo.get_open_balances(customer_id=customer_id)

            outstanding = CustomerOutstandingDTO(customer_id=customer_id, as_of=today)
            accumulate(outstanding, ((row.due_date, row.balance_amount) for row in rows), today)

            return Return.ok(outstanding)

        except Exception as e:
            return Return.err(
                Error(
                    code="OUTSTANDING_REPORT_FAILED",
                    message="Failed to compute customer outstanding",
                    reason=str(e),
                )
            )
