"""Reporting API Routes"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.reports import (
    GetAgingReport,
    GetDashboardSummary,
    GetFinancialSummary,
    GetDeliveryReport,
    GetCustomerAnalytics,
    AgingReportDTO,
    DashboardSummaryDTO,
    DeliveryGrouping,
    FinancialSummaryDTO,
    DeliveryReportDTO,
    CustomerAnalyticsDTO,
)
from src.adapter.repositories import SqlAlchemyReportRepository
from src.depends import CurrentUser, get_session, require_roles
from src.domain.user import UserRole
from src.api.error import ClientError

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/aging", response_model=AgingReportDTO)
async def aging_report(
    area_id: Optional[int] = Query(default=None),
    as_of: Optional[date] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """Receivables aging per customer with bucket totals."""
    result = await GetAgingReport(SqlAlchemyReportRepository(session)).execute(
        area_id=area_id, as_of=as_of
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/dashboard", response_model=DashboardSummaryDTO)
async def dashboard(
    on_date: Optional[date] = Query(default=None, alias="date"),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    result = await GetDashboardSummary(SqlAlchemyReportRepository(session)).execute(on_date)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/financial", response_model=FinancialSummaryDTO)
async def financial_summary(
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """
    Revenue from deliveries, collections by payment method, current
    receivables and subscription counts for a period.
    """
    result = await GetFinancialSummary(SqlAlchemyReportRepository(session)).execute(
        date_from=date_from, date_to=date_to
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/deliveries", response_model=DeliveryReportDTO)
async def delivery_report(
    group_by: DeliveryGrouping = Query(default="date"),
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    area_id: Optional[int] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """Delivery counts, quantities and completion rate grouped by date, area or delivery person."""
    result = await GetDeliveryReport(SqlAlchemyReportRepository(session)).execute(
        group_by=group_by, date_from=date_from, date_to=date_to, area_id=area_id
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/customers", response_model=CustomerAnalyticsDTO)
async def customer_analytics(
    area_id: Optional[int] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    result = await GetCustomerAnalytics(SqlAlchemyReportRepository(session)).execute(area_id=area_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
