"""ListCustomers Use Case"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import CustomerStatus
from .dtos import CustomerListResponseDTO
from .mappers import to_customer_response


class ListCustomers:
    """
    Use Case: List customers filtered by status, area or a search term

    search matches name, phone or customer code, case-insensitive.
    """

    def __init__(self, customer_repo: CustomerRepository):
        self.customer_repo = customer_repo

    async def execute(
        self,
        status: Optional[CustomerStatus] = None,
        area_id: Optional[int] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[CustomerListResponseDTO]:
        try:
            customers, total = await self.customer_repo.list(
                status=status,
                area_id=area_id,
                search=search,
                limit=limit,
                offset=offset,
            )
            return Return.ok(
                CustomerListResponseDTO(
                    customers=[to_customer_response(c) for c in customers],
                    total=total,
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_CUSTOMERS_FAILED",
                    message="Failed to list customers",
                    reason=str(e),
                )
            )
