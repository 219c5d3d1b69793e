"""UpdateCustomer Use Case"""

from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.area_repository import AreaRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.use_cases.errors import constraint_violation_error
from .dtos import UpdateCustomerCommandDTO, CustomerResponseDTO
from .mappers import to_customer_response


class UpdateCustomer:
    """
    Use Case: Update customer details

    Only fields present in the command change. Moving a customer to
    another area requires that area to exist and be active.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        area_repo: AreaRepository,
        customer_repo: CustomerRepository,
    ):
        self.uow = uow
        self.area_repo = area_repo
        self.customer_repo = customer_repo

    async def execute(
        self, customer_id: int, command: UpdateCustomerCommandDTO
    ) -> Result[CustomerResponseDTO]:
        try:
            customer = await self.customer_repo.get_by_id(customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer {customer_id} not found",
                    )
                )

            changes = command.model_dump(exclude_none=True)

            if "area_id" in changes and changes["area_id"] != customer.area_id:
                area = await self.area_repo.get_by_id(changes["area_id"])
                if not area or not area.is_active:
                    return Return.err(
                        Error(
                            code="AREA_NOT_FOUND",
                            message=f"Active area {changes['area_id']} not found",
                        )
                    )

            for field, value in changes.items():
                setattr(customer, field, value)

            customer = await self.customer_repo.update(customer)
            await self.uow.commit()

            return Return.ok(to_customer_response(customer))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_CUSTOMER_FAILED",
                    message="Failed to update customer",
                    reason=str(e),
                )
            )
