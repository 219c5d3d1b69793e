"""Product Catalog Use Cases"""

from typing import List
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.product_repository import ProductRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.product import Product
from .dtos import CreateProductCommandDTO, UpdateProductCommandDTO, ProductResponseDTO


def to_product_response(product: Product) -> ProductResponseDTO:
    return ProductResponseDTO(
        product_id=product.id,
        product_code=product.product_code,
        product_name=product.product_name,
        unit=product.unit,
        price_per_unit=product.price_per_unit,
        description=product.description,
        is_active=product.is_active,
        created_at=product.created_at,
    )


def product_not_found(product_id: int) -> Error:
    return Error(code="PRODUCT_NOT_FOUND", message=f"Product {product_id} not found")


class CreateProduct:

    def __init__(self, uow: UnitOfWork, product_repo: ProductRepository):
        self.uow = uow
        self.product_repo = product_repo

    async def execute(self, command: CreateProductCommandDTO) -> Result[ProductResponseDTO]:
        try:
            product = await self.product_repo.create(
                Product(
                    product_code=command.product_code,
                    product_name=command.product_name,
                    unit=command.unit,
                    price_per_unit=command.price_per_unit,
                    description=command.description,
                )
            )
            await self.uow.commit()
            return Return.ok(to_product_response(product))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_PRODUCT_FAILED",
                    message="Failed to create product",
                    reason=str(e),
                )
            )


class ListProducts:

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    async def execute(self, active_only: bool = False) -> Result[List[ProductResponseDTO]]:
        try:
            products = await self.product_repo.list(active_only=active_only)
            return Return.ok([to_product_response(product) for product in products])

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_PRODUCTS_FAILED",
                    message="Failed to list products",
                    reason=str(e),
                )
            )


class GetProduct:

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    async def execute(self, product_id: int) -> Result[ProductResponseDTO]:
        try:
            product = await self.product_repo.get_by_id(product_id)
            if not product:
                return Return.err(product_not_found(product_id))
            return Return.ok(to_product_response(product))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_PRODUCT_FAILED",
                    message="Failed to retrieve product",
                    reason=str(e),
                )
            )


class UpdateProduct:
    """
    Use Case: Change a product's name, unit, price or availability

    product_code is immutable.
    """

    def __init__(self, uow: UnitOfWork, product_repo: ProductRepository):
        self.uow = uow
        self.product_repo = product_repo

    async def execute(
        self, product_id: int, command: UpdateProductCommandDTO
    ) -> Result[ProductResponseDTO]:
        try:
            product = await self.product_repo.get_by_id(product_id)
            if not product:
                return Return.err(product_not_found(product_id))

            for field, value in command.model_dump(exclude_none=True).items():
                setattr(product, field, value)

            product = await self.product_repo.update(product)
            await self.uow.commit()
            return Return.ok(to_product_response(product))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_PRODUCT_FAILED",
                    message="Failed to update product",
                    reason=str(e),
                )
            )


class DeleteProduct:
    """
    Use Case: Remove a product from the catalog

    Products referenced by subscriptions, deliveries or invoice lines
    are kept; deactivate them instead.
    """

    def __init__(self, uow: UnitOfWork, product_repo: ProductRepository):
        self.uow = uow
        self.product_repo = product_repo

    async def execute(self, product_id: int) -> Result[None]:
        try:
            product = await self.product_repo.get_by_id(product_id)
            if not product:
                return Return.err(product_not_found(product_id))

            if await self.product_repo.is_referenced(product_id):
                return Return.err(
                    Error(
                        code="PRODUCT_IN_USE",
                        message=f"Product {product_id} is used by subscriptions, deliveries or invoices; deactivate it instead",
                    )
                )

            await self.product_repo.delete(product)
            await self.uow.commit()
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_PRODUCT_FAILED",
                    message="Failed to delete product",
                    reason=str(e),
                )
            )
