"""CreateCustomer Use Case"""

import logging
from datetime import date
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.area_repository import AreaRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.customer import Customer
from .dtos import CreateCustomerCommandDTO, CustomerResponseDTO
from .mappers import to_customer_response

logger = logging.getLogger(__name__)


class CreateCustomer:
    """
    Use Case: Register a customer in a delivery area

    Business Rules:
    1. Area must exist and be active
    2. customer_code is auto-generated (CUST-NNNNN)
    3. New customers start active
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

    async def execute(self, command: CreateCustomerCommandDTO) -> Result[CustomerResponseDTO]:
        try:
            # Step 1: Validate area
            area = await self.area_repo.get_by_id(command.area_id)
            if not area or not area.is_active:
                return Return.err(
                    Error(
                        code="AREA_NOT_FOUND",
                        message=f"Active area {command.area_id} not found",
                    )
                )

            # Step 2: Create customer with generated code
            customer_code = await self.customer_repo.generate_customer_code()
            customer = await self.customer_repo.create(
                Customer(
                    customer_code=customer_code,
                    full_name=command.full_name,
                    phone=command.phone,
                    email=command.email,
                    area_id=area.id,
                    address_line1=command.address_line1,
                    address_line2=command.address_line2,
                    city=command.city,
                    pincode=command.pincode,
                    location_notes=command.location_notes,
                    joining_date=command.joining_date or date.today(),
                    created_by=command.created_by,
                )
            )

            # Step 3: Commit transaction
            await self.uow.commit()

            logger.info(f"Created customer {customer.customer_code} in area {area.code}")

            return Return.ok(to_customer_response(customer))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_CUSTOMER_FAILED",
                    message="Failed to create customer",
                    reason=str(e),
                )
            )
