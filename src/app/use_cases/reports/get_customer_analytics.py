"""GetCustomerAnalytics Use Case"""

from collections import Counter
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.report_repository import ReportRepository
from src.domain.customer import CustomerStatus
from .dtos import (
    CustomerAnalyticsDTO,
    CustomerStatsDTO,
    GrowthPointDTO,
    ProductPopularityDTO,
    TopCustomerDTO,
)

GROWTH_MONTHS = 12
TOP_CUSTOMERS = 10


class GetCustomerAnalytics:
    """
    Use Case: Customer base at a glance

    Status counts, new customers per joining month (last 12 months that
    had any), top customers by delivered revenue and product popularity.
    """

    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    async def execute(self, area_id: Optional[int] = None) -> Result[CustomerAnalyticsDTO]:
        try:
            statuses = await self.report_repo.get_customer_status_counts(area_id)
            joining_dates = await self.report_repo.get_joining_dates(area_id)
            top_customers = await self.report_repo.get_top_customers(area_id, limit=TOP_CUSTOMERS)
            products = await self.report_repo.get_product_popularity(area_id)

            growth = Counter(day.strftime("%Y-%m") for day in joining_dates)
            recent_months = sorted(growth, reverse=True)[:GROWTH_MONTHS]

            return Return.ok(
                CustomerAnalyticsDTO(
                    customer_stats=CustomerStatsDTO(
                        total_customers=sum(statuses.values()),
                        active_customers=statuses.get(CustomerStatus.ACTIVE.value, 0),
                        inactive_customers=statuses.get(CustomerStatus.INACTIVE.value, 0),
                        suspended_customers=statuses.get(CustomerStatus.SUSPENDED.value, 0),
                    ),
                    growth_trend=[
                        GrowthPointDTO(month=month, new_customers=growth[month])
                        for month in recent_months
                    ],
                    top_customers=[TopCustomerDTO(**vars(row)) for row in top_customers],
                    product_popularity=[ProductPopularityDTO(**vars(row)) for row in products],
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="CUSTOMER_ANALYTICS_FAILED",
                    message="Failed to build customer analytics",
                    reason=str(e),
                )
            )
