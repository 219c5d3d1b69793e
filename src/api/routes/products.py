"""Product Catalog API Routes"""

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.catalog import (
    CreateProduct,
    ListProducts,
    GetProduct,
    UpdateProduct,
    DeleteProduct,
    CreateProductCommandDTO,
    UpdateProductCommandDTO,
    ProductResponseDTO,
)
from src.adapter.repositories import SqlAlchemyProductRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import CurrentUser, get_current_user, get_session, require_roles
from src.domain.user import UserRole
from src.api.error import ClientError

router = APIRouter(prefix="/products", tags=["Products"])


@router.post(
    "",
    response_model=ProductResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Product code already exists"}},
)
async def create_product(
    request: CreateProductCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = CreateProduct(SqlAlchemyUnitOfWork(session), SqlAlchemyProductRepository(session))
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("", response_model=List[ProductResponseDTO])
async def list_products(
    active_only: bool = Query(default=False),
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await ListProducts(SqlAlchemyProductRepository(session)).execute(active_only=active_only)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{product_id}", response_model=ProductResponseDTO)
async def get_product(
    product_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    result = await GetProduct(SqlAlchemyProductRepository(session)).execute(product_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch("/{product_id}", response_model=ProductResponseDTO)
async def update_product(
    product_id: int,
    request: UpdateProductCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER)),
):
    use_case = UpdateProduct(SqlAlchemyUnitOfWork(session), SqlAlchemyProductRepository(session))
    result = await use_case.execute(product_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={409: {"description": "Product is referenced by subscriptions, deliveries or invoices"}},
)
async def delete_product(
    product_id: int,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(require_roles(UserRole.ADMIN)),
):
    use_case = DeleteProduct(SqlAlchemyUnitOfWork(session), SqlAlchemyProductRepository(session))
    result = await use_case.execute(product_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
