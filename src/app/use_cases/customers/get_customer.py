"""GetCustomer Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from .dtos import CustomerResponseDTO
from .mappers import to_customer_response


class GetCustomer:

    def __init__(self, customer_repo: CustomerRepository):
        self.customer_repo = customer_repo

    async def execute(self, customer_id: int) -> Result[CustomerResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {customer_id} not found",
                    )
                )
            return Return.ok(to_customer_response(customer))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_CUSTOMER_FAILED",
                    message="Failed to retrieve customer",
                    reason=str(e),
                )
            )
