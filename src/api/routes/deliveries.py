"""Delivery API Routes

Scheduling and completing drops, plus the daily route sheet, the monthly
calendar and problems reported by delivery staff.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.deliveries import (
    ScheduleDelivery,
    CompleteDelivery,
    MarkDeliveryMissed,
    ListDeliveries,
    GetDelivery,
    UpdateDelivery,
    DeleteDelivery,
    GetRouteSheet,
    GetDeliveryCalendar,
    ReportDeliveryException,
    ListDeliveryExceptions,
    ScheduleDeliveryCommandDTO,
    CompleteDeliveryCommandDTO,
    MarkMissedCommandDTO,
    UpdateDeliveryCommandDTO,
    ReportExceptionCommandDTO,
    DeliveryResponseDTO,
    DeliveryListResponseDTO,
    RouteSheetDTO,
    DeliveryCalendarDTO,
    DeliveryExceptionResponseDTO,
    DeliveryExceptionListResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyDeliveryRepository,
    SqlAlchemyDeliveryExceptionRepository,
    SqlAlchemyProductRepository,
    SqlAlchemySubscriptionRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import CurrentUser, get_current_user, get_session, require_roles
from src.domain.delivery import DeliveryStatus
from src.domain.delivery_exception import DeliveryExceptionType
from src.domain.user import UserRole
from src.api.error import ClientError

router = APIRouter(prefix="/deliveries", tags=["Deliveries"])


@router.post("", response_model=DeliveryResponseDTO, status_code=status.HTTP_201_CREATED)
async def schedule_delivery(
    request: ScheduleDeliveryCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = ScheduleDelivery(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyProductRepository(session),
        SqlAlchemyDeliveryRepository(session),
        SqlAlchemySubscriptionRepository(session),
    )
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=DeliveryListResponseDTO)
async def list_deliveries(
    customer_id: Optional[int] = Query(default=None),
    area_id: Optional[int] = Query(default=None),
    delivery_status: Optional[DeliveryStatus] = Query(default=None),
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await ListDeliveries(SqlAlchemyDeliveryRepository(session)).execute(
        customer_id=customer_id,
        delivery_status=delivery_status,
        area_id=area_id,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        offset=offset,
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/today", response_model=RouteSheetDTO)
async def todays_route(
    area_id: Optional[int] = Query(default=None),
    delivery_status: Optional[DeliveryStatus] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Today's stops ordered by area, then customer name."""
    result = await GetRouteSheet(SqlAlchemyDeliveryRepository(session)).execute(
        area_id=area_id, delivery_status=delivery_status
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/date/{on_date}", response_model=RouteSheetDTO)
async def route_for_date(
    on_date: date,
    area_id: Optional[int] = Query(default=None),
    delivery_status: Optional[DeliveryStatus] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await GetRouteSheet(SqlAlchemyDeliveryRepository(session)).execute(
        on_date=on_date, area_id=area_id, delivery_status=delivery_status
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/calendar", response_model=DeliveryCalendarDTO)
async def delivery_calendar(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    area_id: Optional[int] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Per-day counts by status with scheduled quantity and amount; empty days are omitted."""
    result = await GetDeliveryCalendar(SqlAlchemyDeliveryRepository(session)).execute(
        year, month, area_id=area_id
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/exceptions", response_model=DeliveryExceptionListResponseDTO)
async def list_exceptions(
    exception_type: Optional[DeliveryExceptionType] = Query(default=None),
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    result = await ListDeliveryExceptions(SqlAlchemyDeliveryExceptionRepository(session)).execute(
        exception_type=exception_type,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        offset=offset,
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{delivery_id}", response_model=DeliveryResponseDTO)
async def get_delivery(
    delivery_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await GetDelivery(SqlAlchemyDeliveryRepository(session)).execute(delivery_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch("/{delivery_id}", response_model=DeliveryResponseDTO)
async def update_delivery(
    delivery_id: int,
    request: UpdateDeliveryCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """
    Reschedule, change quantity or notes.

    Date and quantity only change while the delivery is still open; use
    the complete and missed actions to close it.
    """
    use_case = UpdateDelivery(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyProductRepository(session),
        SqlAlchemyDeliveryRepository(session),
    )
    result = await use_case.execute(delivery_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{delivery_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={409: {"description": "Delivery is billed on an invoice"}},
)
async def delete_delivery(
    delivery_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = DeleteDelivery(SqlAlchemyUnitOfWork(session), SqlAlchemyDeliveryRepository(session))
    result = await use_case.execute(delivery_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{delivery_id}/complete", response_model=DeliveryResponseDTO)
async def complete_delivery(
    delivery_id: int,
    request: CompleteDeliveryCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Mark delivered; the amount is recomputed from the delivered quantity."""
    use_case = CompleteDelivery(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyProductRepository(session),
        SqlAlchemyDeliveryRepository(session),
    )
    result = await use_case.execute(
        delivery_id, request.model_copy(update={"delivered_by": user.user_id})
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/{delivery_id}/missed", response_model=DeliveryResponseDTO)
async def mark_delivery_missed(
    delivery_id: int,
    request: MarkMissedCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    use_case = MarkDeliveryMissed(SqlAlchemyUnitOfWork(session), SqlAlchemyDeliveryRepository(session))
    result = await use_case.execute(
        delivery_id, request.model_copy(update={"delivered_by": user.user_id})
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{delivery_id}/exceptions",
    response_model=DeliveryExceptionResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def report_exception(
    delivery_id: int,
    request: ReportExceptionCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    use_case = ReportDeliveryException(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyDeliveryRepository(session),
        SqlAlchemyDeliveryExceptionRepository(session),
    )
    result = await use_case.execute(
        delivery_id, request.model_copy(update={"reported_by": user.user_id})
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{delivery_id}/exceptions", response_model=DeliveryExceptionListResponseDTO)
async def list_delivery_exceptions(
    delivery_id: int,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    delivery_result = await GetDelivery(SqlAlchemyDeliveryRepository(session)).execute(delivery_id)
    if delivery_result.is_err():
        raise ClientError(delivery_result.error)

    result = await ListDeliveryExceptions(SqlAlchemyDeliveryExceptionRepository(session)).execute(
        delivery_id=delivery_id, limit=limit, offset=offset
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value
