"""Delivery Area API Routes

Areas, the customers living in them and the staff assigned to serve them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.catalog import (
    CreateArea,
    ListAreas,
    GetArea,
    UpdateArea,
    DeleteArea,
    ListAreaPersonnel,
    AssignAreaPersonnel,
    RemoveAreaPersonnel,
    CreateAreaCommandDTO,
    UpdateAreaCommandDTO,
    AreaResponseDTO,
    AreaDetailDTO,
    AssignPersonnelCommandDTO,
    AreaPersonnelDTO,
)
from src.app.use_cases.customers import ListCustomers, CustomerListResponseDTO
from src.adapter.repositories import (
    SqlAlchemyAreaRepository,
    SqlAlchemyAreaAssignmentRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyUserRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import CurrentUser, get_current_user, get_session, require_roles
from src.domain.customer import CustomerStatus
from src.domain.user import UserRole
from src.api.error import ClientError

router = APIRouter(prefix="/areas", tags=["Areas"])


@router.post(
    "",
    response_model=AreaResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Area code already exists"}},
)
async def create_area(
    request: CreateAreaCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = CreateArea(SqlAlchemyUnitOfWork(session), SqlAlchemyAreaRepository(session))
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=List[AreaResponseDTO])
async def list_areas(
    active_only: bool = Query(default=False),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await ListAreas(SqlAlchemyAreaRepository(session)).execute(active_only=active_only)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{area_id}", response_model=AreaDetailDTO)
async def get_area(
    area_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Area details with counts of its customers and assigned staff."""
    use_case = GetArea(SqlAlchemyAreaRepository(session), SqlAlchemyAreaAssignmentRepository(session))
    result = await use_case.execute(area_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch("/{area_id}", response_model=AreaResponseDTO)
async def update_area(
    area_id: int,
    request: UpdateAreaCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = UpdateArea(SqlAlchemyUnitOfWork(session), SqlAlchemyAreaRepository(session))
    result = await use_case.execute(area_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{area_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={409: {"description": "Area still has customers"}},
)
async def delete_area(
    area_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN)),
):
    use_case = DeleteArea(SqlAlchemyUnitOfWork(session), SqlAlchemyAreaRepository(session))
    result = await use_case.execute(area_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{area_id}/customers", response_model=CustomerListResponseDTO)
async def list_area_customers(
    area_id: int,
    status_filter: Optional[CustomerStatus] = Query(default=CustomerStatus.ACTIVE, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    area_result = await GetArea(
        SqlAlchemyAreaRepository(session), SqlAlchemyAreaAssignmentRepository(session)
    ).execute(area_id)
    if area_result.is_err():
        raise ClientError(area_result.error)

    result = await ListCustomers(SqlAlchemyCustomerRepository(session)).execute(
        status=status_filter, area_id=area_id, limit=limit, offset=offset
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{area_id}/personnel", response_model=List[AreaPersonnelDTO])
async def list_area_personnel(
    area_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    use_case = ListAreaPersonnel(
        SqlAlchemyAreaRepository(session), SqlAlchemyAreaAssignmentRepository(session)
    )
    result = await use_case.execute(area_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{area_id}/personnel",
    response_model=AreaPersonnelDTO,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "User already assigned to this area"}},
)
async def assign_area_personnel(
    area_id: int,
    request: AssignPersonnelCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = AssignAreaPersonnel(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAreaRepository(session),
        SqlAlchemyUserRepository(session),
        SqlAlchemyAreaAssignmentRepository(session),
    )
    result = await use_case.execute(area_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete("/{area_id}/personnel/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_area_personnel(
    area_id: int,
    assignment_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = RemoveAreaPersonnel(
        SqlAlchemyUnitOfWork(session), SqlAlchemyAreaAssignmentRepository(session)
    )
    result = await use_case.execute(area_id, assignment_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
