"""Area Use Cases"""

from datetime import date
from typing import List
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.area_repository import AreaRepository
from src.app.repositories.area_assignment_repository import AreaAssignmentRepository
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.area import Area
from src.domain.area_assignment import AreaAssignment
from src.domain.user import User
from .dtos import (
    CreateAreaCommandDTO,
    UpdateAreaCommandDTO,
    AreaResponseDTO,
    AreaDetailDTO,
    AssignPersonnelCommandDTO,
    AreaPersonnelDTO,
)


def to_area_response(area: Area) -> AreaResponseDTO:
    return AreaResponseDTO(
        area_id=area.id,
        name=area.name,
        code=area.code,
        description=area.description,
        is_active=area.is_active,
        created_at=area.created_at,
    )


def to_personnel_response(assignment: AreaAssignment, user: User) -> AreaPersonnelDTO:
    return AreaPersonnelDTO(
        assignment_id=assignment.id,
        area_id=assignment.area_id,
        user_id=user.id,
        full_name=user.full_name,
        email=user.email,
        phone=user.phone,
        assigned_date=assignment.assigned_date,
        is_active=assignment.is_active,
    )


def area_not_found(area_id: int) -> Error:
    return Error(code="AREA_NOT_FOUND", message=f"Area {area_id} not found")


class CreateArea:
    """
    Use Case: Register a delivery area

    Area codes are unique; a duplicate surfaces as DUPLICATE_ENTRY.
    """

    def __init__(self, uow: UnitOfWork, area_repo: AreaRepository):
        self.uow = uow
        self.area_repo = area_repo

    async def execute(self, command: CreateAreaCommandDTO) -> Result[AreaResponseDTO]:
        try:
            area = await self.area_repo.create(
                Area(
                    name=command.name,
                    code=command.code.upper(),
                    description=command.description,
                )
            )
            await self.uow.commit()
            return Return.ok(to_area_response(area))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_AREA_FAILED",
                    message="Failed to create area",
                    reason=str(e),
                )
            )


class ListAreas:

    def __init__(self, area_repo: AreaRepository):
        self.area_repo = area_repo

    async def execute(self, active_only: bool = False) -> Result[List[AreaResponseDTO]]:
        try:
            areas = await self.area_repo.list(active_only=active_only)
            return Return.ok([to_area_response(area) for area in areas])

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_AREAS_FAILED",
                    message="Failed to list areas",
                    reason=str(e),
                )
            )


class GetArea:
    """Use Case: Area with its customer and staff counts"""

    def __init__(self, area_repo: AreaRepository, assignment_repo: AreaAssignmentRepository):
        self.area_repo = area_repo
        self.assignment_repo = assignment_repo

    async def execute(self, area_id: int) -> Result[AreaDetailDTO]:
        try:
            area = await self.area_repo.get_by_id(area_id)
            if not area:
                return Return.err(area_not_found(area_id))

            customer_count = await self.area_repo.count_customers(area_id)
            personnel = await self.assignment_repo.list_active_for_area(area_id)

            return Return.ok(
                AreaDetailDTO(
                    **to_area_response(area).model_dump(),
                    customer_count=customer_count,
                    personnel_count=len(personnel),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_AREA_FAILED",
                    message="Failed to retrieve area",
                    reason=str(e),
                )
            )


class UpdateArea:
    """
    Use Case: Rename, recode or (de)activate an area

    Deactivating an area keeps its customers; new customers can no
    longer be registered in it.
    """

    def __init__(self, uow: UnitOfWork, area_repo: AreaRepository):
        self.uow = uow
        self.area_repo = area_repo

    async def execute(self, area_id: int, command: UpdateAreaCommandDTO) -> Result[AreaResponseDTO]:
        try:
            area = await self.area_repo.get_by_id(area_id)
            if not area:
                return Return.err(area_not_found(area_id))

            changes = command.model_dump(exclude_none=True)
            if "code" in changes:
                changes["code"] = changes["code"].upper()
            for field, value in changes.items():
                setattr(area, field, value)

            area = await self.area_repo.update(area)
            await self.uow.commit()
            return Return.ok(to_area_response(area))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_AREA_FAILED",
                    message="Failed to update area",
                    reason=str(e),
                )
            )


class DeleteArea:
    """
    Use Case: Delete an area

    Refused while any customer still lives in the area; staff
    assignments go with it.
    """

    def __init__(self, uow: UnitOfWork, area_repo: AreaRepository):
        self.uow = uow
        self.area_repo = area_repo

    async def execute(self, area_id: int) -> Result[None]:
        try:
            area = await self.area_repo.get_by_id(area_id)
            if not area:
                return Return.err(area_not_found(area_id))

            customers = await self.area_repo.count_customers(area_id)
            if customers:
                return Return.err(
                    Error(
                        code="AREA_HAS_CUSTOMERS",
                        message=f"Area {area_id} still has {customers} customers; reassign them first",
                    )
                )

            await self.area_repo.delete(area)
            await self.uow.commit()
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_AREA_FAILED",
                    message="Failed to delete area",
                    reason=str(e),
                )
            )


class ListAreaPersonnel:

    def __init__(self, area_repo: AreaRepository, assignment_repo: AreaAssignmentRepository):
        self.area_repo = area_repo
        self.assignment_repo = assignment_repo

    async def execute(self, area_id: int) -> Result[List[AreaPersonnelDTO]]:
        try:
            if not await self.area_repo.get_by_id(area_id):
                return Return.err(area_not_found(area_id))

            rows = await self.assignment_repo.list_active_for_area(area_id)
            return Return.ok([to_personnel_response(assignment, user) for assignment, user in rows])

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_AREA_PERSONNEL_FAILED",
                    message="Failed to list area personnel",
                    reason=str(e),
                )
            )


class AssignAreaPersonnel:
    """
    Use Case: Assign a staff member to an area

    The user must exist and be active. A user holds at most one active
    assignment per area.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        area_repo: AreaRepository,
        user_repo: UserRepository,
        assignment_repo: AreaAssignmentRepository,
    ):
        self.uow = uow
        self.area_repo = area_repo
        self.user_repo = user_repo
        self.assignment_repo = assignment_repo

    async def execute(self, area_id: int, command: AssignPersonnelCommandDTO) -> Result[AreaPersonnelDTO]:
        try:
            if not await self.area_repo.get_by_id(area_id):
                return Return.err(area_not_found(area_id))

            user = await self.user_repo.get_by_id(command.user_id)
            if not user or not user.is_active:
                return Return.err(
                    Error(code="USER_NOT_FOUND", message=f"Active user {command.user_id} not found")
                )

            if await self.assignment_repo.get_active(area_id, user.id):
                return Return.err(
                    Error(
                        code="ASSIGNMENT_EXISTS",
                        message=f"User {user.id} is already assigned to area {area_id}",
                    )
                )

            assignment = await self.assignment_repo.create(
                AreaAssignment(
                    user_id=user.id,
                    area_id=area_id,
                    assigned_date=command.assigned_date or date.today(),
                )
            )
            await self.uow.commit()
            return Return.ok(to_personnel_response(assignment, user))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ASSIGN_PERSONNEL_FAILED",
                    message="Failed to assign personnel",
                    reason=str(e),
                )
            )


class RemoveAreaPersonnel:
    """Use Case: End an assignment; the row stays as history"""

    def __init__(self, uow: UnitOfWork, assignment_repo: AreaAssignmentRepository):
        self.uow = uow
        self.assignment_repo = assignment_repo

    async def execute(self, area_id: int, assignment_id: int) -> Result[None]:
        try:
            assignment = await self.assignment_repo.get_by_id(assignment_id)
            if not assignment or assignment.area_id != area_id or not assignment.is_active:
                return Return.err(
                    Error(
                        code="ASSIGNMENT_NOT_FOUND",
                        message=f"Active assignment {assignment_id} not found in area {area_id}",
                    )
                )

            assignment.is_active = False
            await self.assignment_repo.update(assignment)
            await self.uow.commit()
            return Return.ok(None)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REMOVE_PERSONNEL_FAILED",
                    message="Failed to remove personnel",
                    reason=str(e),
                )
            )
