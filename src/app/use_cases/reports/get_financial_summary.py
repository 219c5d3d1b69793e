"""GetFinancialSummary Use Case"""

from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.report_repository import ReportRepository
from src.domain.payment import PaymentMethod
from src.domain.subscription import SubscriptionPlanType
from .dtos import (
    ZERO,
    CollectionSummaryDTO,
    FinancialSummaryDTO,
    OutstandingSummaryDTO,
    RevenueSummaryDTO,
    SubscriptionSummaryDTO,
)


class GetFinancialSummary:
    """
    Use Case: Money in and money owed

    Revenue counts delivered drops scheduled in the period; collections
    count completed payments dated in the period. Outstanding and plan
    counts are current regardless of the period. Omitted bounds are open.
    """

    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    async def execute(
        self, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> Result[FinancialSummaryDTO]:
        if date_from and date_to and date_to < date_from:
            return Return.err(
                Error(code="INVALID_DATE_RANGE", message="date_to must not be before date_from")
            )
        try:
            deliveries = await self.report_repo.get_delivery_totals(date_from, date_to)
            by_method = await self.report_repo.get_payment_totals_by_method(date_from, date_to)
            payment_count = await self.report_repo.count_payments(date_from, date_to)
            open_balances = await self.report_repo.get_open_balances()
            plans = await self.report_repo.get_active_subscription_counts()

            return Return.ok(
                FinancialSummaryDTO(
                    date_from=date_from,
                    date_to=date_to,
                    revenue=RevenueSummaryDTO(
                        total_deliveries=deliveries.total_deliveries,
                        completed_deliveries=deliveries.completed_deliveries,
                        total_revenue=deliveries.total_revenue,
                        total_quantity_delivered=deliveries.total_quantity_delivered,
                    ),
                    payments=CollectionSummaryDTO(
                        total_payments=payment_count,
                        total_collected=sum(by_method.values(), ZERO),
                        by_method={
                            method.value: by_method.get(method.value, ZERO) for method in PaymentMethod
                        },
                    ),
                    outstanding=OutstandingSummaryDTO(
                        total_outstanding=sum((row.balance_amount for row in open_balances), ZERO),
                        outstanding_invoices=len(open_balances),
                    ),
                    subscriptions=SubscriptionSummaryDTO(
                        active_subscriptions=sum(plans.values()),
                        daily_plans=plans.get(SubscriptionPlanType.DAILY.value, 0),
                        weekly_plans=plans.get(SubscriptionPlanType.WEEKLY.value, 0),
                        custom_plans=plans.get(SubscriptionPlanType.CUSTOM.value, 0),
                    ),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="FINANCIAL_SUMMARY_FAILED",
                    message="Failed to build financial summary",
                    reason=str(e),
                )
            )
