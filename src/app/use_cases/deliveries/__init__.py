from .delivery_lifecycle import ScheduleDelivery, CompleteDelivery, MarkDeliveryMissed
from .delivery_management import GetDelivery, UpdateDelivery, DeleteDelivery
from .delivery_exceptions import ReportDeliveryException, ListDeliveryExceptions
from .list_deliveries import ListDeliveries
from .route_sheet import GetRouteSheet, GetDeliveryCalendar
from .dtos import (
    ScheduleDeliveryCommandDTO,
    CompleteDeliveryCommandDTO,
    MarkMissedCommandDTO,
    UpdateDeliveryCommandDTO,
    ReportExceptionCommandDTO,
    DeliveryResponseDTO,
    DeliveryListResponseDTO,
    RouteStopDTO,
    RouteSheetDTO,
    CalendarDayDTO,
    DeliveryCalendarDTO,
    DeliveryExceptionResponseDTO,
    DeliveryExceptionListResponseDTO,
)

__all__ = [
    "ScheduleDelivery",
    "CompleteDelivery",
    "MarkDeliveryMissed",
    "GetDelivery",
    "UpdateDelivery",
    "DeleteDelivery",
    "ReportDeliveryException",
    "ListDeliveryExceptions",
    "ListDeliveries",
    "GetRouteSheet",
    "GetDeliveryCalendar",
    "ScheduleDeliveryCommandDTO",
    "CompleteDeliveryCommandDTO",
    "MarkMissedCommandDTO",
    "UpdateDeliveryCommandDTO",
    "ReportExceptionCommandDTO",
    "DeliveryResponseDTO",
    "DeliveryListResponseDTO",
    "RouteStopDTO",
    "RouteSheetDTO",
    "CalendarDayDTO",
    "DeliveryCalendarDTO",
    "DeliveryExceptionResponseDTO",
    "DeliveryExceptionListResponseDTO",
]
