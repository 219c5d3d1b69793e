"""GetDashboardSummary Use Case"""

from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.report_repository import ReportRepository
from .dtos import ZERO, DashboardSummaryDTO


class GetDashboardSummary:
    """
    Use Case: Daily operational snapshot

    Deliveries by status and revenue for the day, completed payments
    received that day, and current receivables with the overdue share.
    """

    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    async def execute(self, on_date: Optional[date] = None) -> Result[DashboardSummaryDTO]:
        day = on_date or date.today()
        try:
            deliveries = await self.report_repo.get_delivery_counts(day)
            delivered_revenue = await self.report_repo.get_delivered_revenue(day)
            payments = await self.report_repo.get_payment_totals(day)
            open_balances = await self.report_repo.get_open_balances()
            overdue = [row for row in open_balances if row.due_date < day]
            active_customers = await self.report_repo.count_active_customers()
            active_areas = await self.report_repo.count_active_areas()
            subscriptions = await self.report_repo.get_active_subscription_counts()

            return Return.ok(
                DashboardSummaryDTO(
                    summary_date=day,
                    deliveries=deliveries,
                    delivered_revenue=delivered_revenue,
                    payments_count=payments["count"],
                    payments_total=payments["total"],
                    total_outstanding=sum(
                        (row.balance_amount for row in open_balances), ZERO
                    ),
                    pending_customers=len({row.customer_id for row in open_balances}),
                    overdue_invoices=len(overdue),
                    overdue_amount=sum((row.balance_amount for row in overdue), ZERO),
                    active_customers=active_customers,
                    active_subscriptions=sum(subscriptions.values()),
                    active_areas=active_areas,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="DASHBOARD_SUMMARY_FAILED",
                    message="Failed to build dashboard summary",
                    reason=str(e),
                )
            )
