"""Customer API Routes

Customer records plus per-customer views of invoices, payments and
outstanding balance.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.customers import (
    CreateCustomer,
    DeleteCustomer,
    GetCustomer,
    ListCustomers,
    UpdateCustomer,
    CreateCustomerCommandDTO,
    UpdateCustomerCommandDTO,
    CustomerResponseDTO,
    CustomerListResponseDTO,
)
from src.app.use_cases.invoices import ListInvoices, InvoiceListResponseDTO
from src.app.use_cases.payments import ListPayments, PaymentListResponseDTO
from src.app.use_cases.reports import GetCustomerOutstanding, CustomerOutstandingDTO
from src.app.use_cases.subscriptions import ListSubscriptions, SubscriptionListResponseDTO
from src.adapter.repositories import (
    SqlAlchemyAreaRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyReportRepository,
    SqlAlchemySubscriptionRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import CurrentUser, get_current_user, get_session, require_roles
from src.domain.customer import CustomerStatus
from src.domain.invoice import InvoiceStatus
from src.domain.subscription import SubscriptionStatus
from src.domain.user import UserRole
from src.api.error import ClientError

router = APIRouter(prefix="/customers", tags=["Customers"])


async def ensure_customer(session: AsyncSession, customer_id: int) -> None:
    result = await GetCustomer(SqlAlchemyCustomerRepository(session)).execute(customer_id)
    if result.is_err():
        raise ClientError(result.error)


@router.post(
    "",
    response_model=CustomerResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Area not found"}},
)
async def create_customer(
    request: CreateCustomerCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """Register a customer; the customer code (CUST-NNNNN) is generated."""
    use_case = CreateCustomer(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAreaRepository(session),
        SqlAlchemyCustomerRepository(session),
    )
    result = await use_case.execute(request.model_copy(update={"created_by": user.user_id}))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=CustomerListResponseDTO)
async def list_customers(
    status_filter: Optional[CustomerStatus] = Query(default=None, alias="status"),
    area_id: Optional[int] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=100),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await ListCustomers(SqlAlchemyCustomerRepository(session)).execute(
        status=status_filter,
        area_id=area_id,
        search=search,
        limit=limit,
        offset=offset,
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{customer_id}", response_model=CustomerResponseDTO)
async def get_customer(
    customer_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await GetCustomer(SqlAlchemyCustomerRepository(session)).execute(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch("/{customer_id}", response_model=CustomerResponseDTO)
async def update_customer(
    customer_id: int,
    request: UpdateCustomerCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = UpdateCustomer(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAreaRepository(session),
        SqlAlchemyCustomerRepository(session),
    )
    result = await use_case.execute(customer_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={409: {"description": "Customer has invoices or payments"}},
)
async def delete_customer(
    customer_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN)),
):
    """Delete a customer without billing history; others should be marked inactive."""
    use_case = DeleteCustomer(SqlAlchemyUnitOfWork(session), SqlAlchemyCustomerRepository(session))
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get(
    "/{customer_id}/outstanding",
    response_model=CustomerOutstandingDTO,
    responses={404: {"description": "Customer not found"}},
)
async def get_customer_outstanding(
    customer_id: int,
    as_of: Optional[date] = Query(default=None, description="Aging reference date, defaults to today"),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Outstanding balance split into aging buckets.

    Buckets by days past due: current (not yet due), 1-30, 31-60, 61-90, 90+.
    A customer without open invoices gets all zeros.
    """
    use_case = GetCustomerOutstanding(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyReportRepository(session),
    )
    result = await use_case.execute(customer_id, as_of=as_of)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{customer_id}/invoices", response_model=InvoiceListResponseDTO)
async def list_customer_invoices(
    customer_id: int,
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    await ensure_customer(session, customer_id)

    result = await ListInvoices(SqlAlchemyInvoiceRepository(session)).execute(
        customer_id=customer_id, status=status_filter, limit=limit, offset=offset
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{customer_id}/payments", response_model=PaymentListResponseDTO)
async def list_customer_payments(
    customer_id: int,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    await ensure_customer(session, customer_id)

    result = await ListPayments(SqlAlchemyPaymentRepository(session)).execute(
        customer_id=customer_id, limit=limit, offset=offset
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{customer_id}/subscriptions", response_model=SubscriptionListResponseDTO)
async def list_customer_subscriptions(
    customer_id: int,
    status_filter: Optional[SubscriptionStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    await ensure_customer(session, customer_id)

    result = await ListSubscriptions(SqlAlchemySubscriptionRepository(session)).execute(
        customer_id=customer_id, status=status_filter, limit=limit, offset=offset
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value
