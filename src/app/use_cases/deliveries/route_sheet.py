"""Route sheet and calendar views over scheduled deliveries"""

import calendar
from collections import Counter
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.delivery_repository import DeliveryRepository, RouteStop
from src.domain.delivery import DeliveryStatus
from .delivery_lifecycle import to_delivery_response
from .dtos import CalendarDayDTO, DeliveryCalendarDTO, RouteSheetDTO, RouteStopDTO


def to_route_stop(stop: RouteStop) -> RouteStopDTO:
    customer, product = stop.customer, stop.product
    return RouteStopDTO(
        **to_delivery_response(stop.delivery).model_dump(),
        customer_code=customer.customer_code,
        customer_name=customer.full_name,
        phone=customer.phone,
        address_line1=customer.address_line1,
        address_line2=customer.address_line2,
        city=customer.city,
        location_notes=customer.location_notes,
        area_name=stop.area_name,
        product_code=product.product_code,
        product_name=product.product_name,
        unit=product.unit,
    )


class GetRouteSheet:
    """
    Use Case: Everything to deliver on one day

    Stops are ordered by area, then customer name. Defaults to today.
    """

    def __init__(self, delivery_repo: DeliveryRepository):
        self.delivery_repo = delivery_repo

    async def execute(
        self,
        on_date: Optional[date] = None,
        area_id: Optional[int] = None,
        delivery_status: Optional[DeliveryStatus] = None,
    ) -> Result[RouteSheetDTO]:
        day = on_date or date.today()
        try:
            stops = await self.delivery_repo.list_route(
                day, area_id=area_id, delivery_status=delivery_status
            )
            counts = Counter(stop.delivery.delivery_status.value for stop in stops)

            return Return.ok(
                RouteSheetDTO(
                    delivery_date=day,
                    total=len(stops),
                    status_counts=dict(counts),
                    stops=[to_route_stop(stop) for stop in stops],
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="ROUTE_SHEET_FAILED",
                    message="Failed to build route sheet",
                    reason=str(e),
                )
            )


class GetDeliveryCalendar:
    """Use Case: Per-day delivery counts for one month"""

    def __init__(self, delivery_repo: DeliveryRepository):
        self.delivery_repo = delivery_repo

    async def execute(
        self, year: int, month: int, area_id: Optional[int] = None
    ) -> Result[DeliveryCalendarDTO]:
        try:
            last_day = calendar.monthrange(year, month)[1]
            days = await self.delivery_repo.get_calendar(
                date(year, month, 1), date(year, month, last_day), area_id=area_id
            )

            return Return.ok(
                DeliveryCalendarDTO(
                    year=year,
                    month=month,
                    days=[
                        CalendarDayDTO(
                            scheduled_date=day.scheduled_date,
                            total_deliveries=sum(day.status_counts.values()),
                            total_quantity=day.total_quantity,
                            total_amount=day.total_amount,
                            **day.status_counts,
                        )
                        for day in days
                    ],
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="DELIVERY_CALENDAR_FAILED",
                    message="Failed to build delivery calendar",
                    reason=str(e),
                )
            )
