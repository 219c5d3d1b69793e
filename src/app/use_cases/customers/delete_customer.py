"""DeleteCustomer Use Case"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository


class DeleteCustomer:
    """
    Use Case: Delete a customer record

    Only customers without invoices or payments can be deleted; their
    subscriptions and deliveries go with them. Customers with billing
    history are set to inactive instead.
    """

    def __init__(self, uow: UnitOfWork, customer_repo: CustomerRepository):
        self.uow = uow
        self.customer_repo = customer_repo

    async def execute(self, customer_id: int) -> Result[None]:
        try:
            customer = await self.customer_repo.get_by_id(customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {customer_id} not found",
                    )
                )

            if await self.customer_repo.has_billing_history(customer_id):
                return Return.err(
                    Error(
                        code="CUSTOMER_HAS_BILLING_HISTORY",
                        message=f"Customer {customer_id} has invoices or payments; set the status to inactive instead",
                    )
                )

            await self.customer_repo.delete(customer)
            await self.uow.commit()
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_CUSTOMER_FAILED",
                    message="Failed to delete customer",
                    reason=str(e),
                )
            )
