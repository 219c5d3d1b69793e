"""GetDeliveryReport Use Case"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.report_repository import ReportRepository, DeliveryReportRow
from .dtos import ZERO, DeliveryGrouping, DeliveryReportDTO, DeliveryReportRowDTO


def completion_rate(completed: int, total: int) -> Decimal:
    if not total:
        return ZERO
    return (Decimal(completed) * 100 / Decimal(total)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def to_report_row(row: DeliveryReportRow) -> DeliveryReportRowDTO:
    return DeliveryReportRowDTO(
        scheduled_date=row.scheduled_date,
        group_id=row.group_id,
        group_name=row.group_name,
        total_deliveries=row.total_deliveries,
        completed=row.completed,
        missed=row.missed,
        cancelled=row.cancelled,
        total_quantity_scheduled=row.total_quantity_scheduled,
        total_quantity_delivered=row.total_quantity_delivered,
        total_amount=row.total_amount,
        completion_rate=completion_rate(row.completed, row.total_deliveries),
    )


class GetDeliveryReport:
    """
    Use Case: Delivery performance per day

    Rows can be split further by area or by the person who recorded
    the outcome.
    """

    def __init__(self, report_repo: ReportRepository):
        self.report_repo = report_repo

    async def execute(
        self,
        group_by: DeliveryGrouping = "date",
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        area_id: Optional[int] = None,
    ) -> Result[DeliveryReportDTO]:
        try:
            rows = await self.report_repo.get_delivery_report(
                group_by=group_by, date_from=date_from, date_to=date_to, area_id=area_id
            )
            return Return.ok(
                DeliveryReportDTO(group_by=group_by, rows=[to_report_row(row) for row in rows])
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="DELIVERY_REPORT_FAILED",
                    message="Failed to build delivery report",
                    reason=str(e),
                )
            )
