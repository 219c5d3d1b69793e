"""Subscription API Routes

Standing orders: which product a customer receives, how much, and on
which days.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.subscriptions import (
    CreateSubscription,
    GetSubscription,
    ListSubscriptions,
    UpdateSubscription,
    ReplaceSubscriptionSchedule,
    PauseSubscription,
    ResumeSubscription,
    CancelSubscription,
    DeleteSubscription,
    CreateSubscriptionCommandDTO,
    UpdateSubscriptionCommandDTO,
    ReplaceScheduleCommandDTO,
    SubscriptionResponseDTO,
    SubscriptionListResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyProductRepository,
    SqlAlchemySubscriptionRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import CurrentUser, get_current_user, get_session, require_roles
from src.domain.subscription import SubscriptionStatus
from src.domain.user import UserRole
from src.api.error import ClientError

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post(
    "",
    response_model=SubscriptionResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Schedule does not match the plan type"},
        404: {"description": "Customer or product not found"},
    },
)
async def create_subscription(
    request: CreateSubscriptionCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """
    Start a subscription for an active customer and product.

    Daily plans take one schedule row without day fields, weekly plans
    one row per day_of_week, custom plans mix day_of_week and day_of_month rows.
    """
    use_case = CreateSubscription(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyProductRepository(session),
        SqlAlchemySubscriptionRepository(session),
    )
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=SubscriptionListResponseDTO)
async def list_subscriptions(
    customer_id: Optional[int] = Query(default=None),
    product_id: Optional[int] = Query(default=None),
    area_id: Optional[int] = Query(default=None),
    status_filter: Optional[SubscriptionStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await ListSubscriptions(SqlAlchemySubscriptionRepository(session)).execute(
        customer_id=customer_id,
        product_id=product_id,
        status=status_filter,
        area_id=area_id,
        limit=limit,
        offset=offset,
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{subscription_id}", response_model=SubscriptionResponseDTO)
async def get_subscription(
    subscription_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await GetSubscription(SqlAlchemySubscriptionRepository(session)).execute(subscription_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch("/{subscription_id}", response_model=SubscriptionResponseDTO)
async def update_subscription(
    subscription_id: int,
    request: UpdateSubscriptionCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = UpdateSubscription(
        SqlAlchemyUnitOfWork(session), SqlAlchemySubscriptionRepository(session)
    )
    result = await use_case.execute(subscription_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("/{subscription_id}/schedule", response_model=SubscriptionResponseDTO)
async def replace_subscription_schedule(
    subscription_id: int,
    request: ReplaceScheduleCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    """Replace the active schedule; previous rows are kept inactive."""
    use_case = ReplaceSubscriptionSchedule(
        SqlAlchemyUnitOfWork(session), SqlAlchemySubscriptionRepository(session)
    )
    result = await use_case.execute(subscription_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/{subscription_id}/pause", response_model=SubscriptionResponseDTO)
async def pause_subscription(
    subscription_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = PauseSubscription(SqlAlchemyUnitOfWork(session), SqlAlchemySubscriptionRepository(session))
    result = await use_case.execute(subscription_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/{subscription_id}/resume", response_model=SubscriptionResponseDTO)
async def resume_subscription(
    subscription_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = ResumeSubscription(SqlAlchemyUnitOfWork(session), SqlAlchemySubscriptionRepository(session))
    result = await use_case.execute(subscription_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/{subscription_id}/cancel", response_model=SubscriptionResponseDTO)
async def cancel_subscription(
    subscription_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = CancelSubscription(SqlAlchemyUnitOfWork(session), SqlAlchemySubscriptionRepository(session))
    result = await use_case.execute(subscription_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subscription(
    subscription_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN)),
):
    """Remove a plan with its schedule; linked deliveries keep their history."""
    use_case = DeleteSubscription(SqlAlchemyUnitOfWork(session), SqlAlchemySubscriptionRepository(session))
    result = await use_case.execute(subscription_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
