"""Unit tests for area and product catalog use cases"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.catalog import (
    GetArea,
    UpdateArea,
    DeleteArea,
    AssignAreaPersonnel,
    RemoveAreaPersonnel,
    UpdateProduct,
    DeleteProduct,
    UpdateAreaCommandDTO,
    AssignPersonnelCommandDTO,
    UpdateProductCommandDTO,
)
from src.domain.area import Area
from src.domain.area_assignment import AreaAssignment
from src.domain.product import Product, ProductUnit
from src.domain.user import User, UserRole
from tests.unit.use_cases.helpers import id_assigner, returns_argument


def make_area():
    return Area(id=3, name="Kothrud", code="KTH")


def make_product():
    return Product(
        id=5,
        product_code="MILK-1L",
        product_name="Cow Milk 1L",
        unit=ProductUnit.LITRE,
        price_per_unit=Decimal("60.00"),
    )


def make_staff(is_active=True):
    return User(
        id=11,
        email="suresh@milkdelivery.com",
        password_hash="hashed:secret1",
        full_name="Suresh Pawar",
        phone="9876511111",
        role=UserRole.DELIVERY_PERSON,
        is_active=is_active,
    )


@pytest.fixture
def mock_area_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_area())
    repo.update = AsyncMock(side_effect=returns_argument)
    repo.delete = AsyncMock()
    repo.count_customers = AsyncMock(return_value=0)
    return repo


@pytest.fixture
def mock_assignment_repo():
    repo = MagicMock()
    repo.get_active = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=id_assigner(start=40))
    repo.update = AsyncMock(side_effect=returns_argument)
    repo.list_active_for_area = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_user_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_staff())
    return repo


@pytest.fixture
def mock_product_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_product())
    repo.update = AsyncMock(side_effect=returns_argument)
    repo.delete = AsyncMock()
    repo.is_referenced = AsyncMock(return_value=False)
    return repo


@pytest.mark.asyncio
class TestAreas:

    async def test_detail_counts_customers_and_staff(self, mock_area_repo, mock_assignment_repo):
        mock_area_repo.count_customers = AsyncMock(return_value=12)
        mock_assignment_repo.list_active_for_area = AsyncMock(
            return_value=[(MagicMock(), MagicMock()), (MagicMock(), MagicMock())]
        )

        result = await GetArea(mock_area_repo, mock_assignment_repo).execute(3)

        assert result.is_ok()
        assert result.value.code == "KTH"
        assert result.value.customer_count == 12
        assert result.value.personnel_count == 2

    async def test_update_upper_cases_code(self, mock_uow, mock_area_repo):
        result = await UpdateArea(mock_uow, mock_area_repo).execute(
            3, UpdateAreaCommandDTO(code="ktw", is_active=False)
        )

        assert result.is_ok()
        assert result.value.code == "KTW"
        assert result.value.is_active is False
        mock_uow.commit.assert_called_once()

    async def test_delete_refused_while_customers_remain(self, mock_uow, mock_area_repo):
        """
        Given: An area with customers
        When: It is deleted
        Then: The delete is refused and nothing is removed
        """
        # Arrange
        mock_area_repo.count_customers = AsyncMock(return_value=4)

        # Act
        result = await DeleteArea(mock_uow, mock_area_repo).execute(3)

        # Assert
        assert result.is_err()
        assert result.error.code == "AREA_HAS_CUSTOMERS"
        mock_area_repo.delete.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_delete_empty_area(self, mock_uow, mock_area_repo):
        result = await DeleteArea(mock_uow, mock_area_repo).execute(3)

        assert result.is_ok()
        mock_area_repo.delete.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_unknown_area(self, mock_uow, mock_area_repo):
        mock_area_repo.get_by_id = AsyncMock(return_value=None)

        result = await DeleteArea(mock_uow, mock_area_repo).execute(99)

        assert result.is_err()
        assert result.error.code == "AREA_NOT_FOUND"


@pytest.mark.asyncio
class TestAreaPersonnel:

    async def test_assigns_staff_member(
        self, mock_uow, mock_area_repo, mock_user_repo, mock_assignment_repo
    ):
        use_case = AssignAreaPersonnel(mock_uow, mock_area_repo, mock_user_repo, mock_assignment_repo)

        result = await use_case.execute(3, AssignPersonnelCommandDTO(user_id=11))

        assert result.is_ok()
        assert result.value.assignment_id == 40
        assert result.value.full_name == "Suresh Pawar"
        assert result.value.assigned_date == date.today()
        mock_uow.commit.assert_called_once()

    async def test_already_assigned(
        self, mock_uow, mock_area_repo, mock_user_repo, mock_assignment_repo
    ):
        mock_assignment_repo.get_active = AsyncMock(return_value=MagicMock())
        use_case = AssignAreaPersonnel(mock_uow, mock_area_repo, mock_user_repo, mock_assignment_repo)

        result = await use_case.execute(3, AssignPersonnelCommandDTO(user_id=11))

        assert result.is_err()
        assert result.error.code == "ASSIGNMENT_EXISTS"
        mock_assignment_repo.create.assert_not_called()

    async def test_inactive_user_cannot_be_assigned(
        self, mock_uow, mock_area_repo, mock_user_repo, mock_assignment_repo
    ):
        mock_user_repo.get_by_id = AsyncMock(return_value=make_staff(is_active=False))
        use_case = AssignAreaPersonnel(mock_uow, mock_area_repo, mock_user_repo, mock_assignment_repo)

        result = await use_case.execute(3, AssignPersonnelCommandDTO(user_id=11))

        assert result.is_err()
        assert result.error.code == "USER_NOT_FOUND"

    async def test_remove_deactivates_assignment(self, mock_uow, mock_assignment_repo):
        assignment = AreaAssignment(id=40, user_id=11, area_id=3)
        mock_assignment_repo.get_by_id = AsyncMock(return_value=assignment)

        result = await RemoveAreaPersonnel(mock_uow, mock_assignment_repo).execute(3, 40)

        assert result.is_ok()
        assert assignment.is_active is False
        mock_uow.commit.assert_called_once()

    async def test_remove_assignment_of_other_area(self, mock_uow, mock_assignment_repo):
        mock_assignment_repo.get_by_id = AsyncMock(
            return_value=AreaAssignment(id=40, user_id=11, area_id=8)
        )

        result = await RemoveAreaPersonnel(mock_uow, mock_assignment_repo).execute(3, 40)

        assert result.is_err()
        assert result.error.code == "ASSIGNMENT_NOT_FOUND"
        mock_assignment_repo.update.assert_not_called()


@pytest.mark.asyncio
class TestProducts:

    async def test_price_change(self, mock_uow, mock_product_repo):
        result = await UpdateProduct(mock_uow, mock_product_repo).execute(
            5, UpdateProductCommandDTO(price_per_unit=Decimal("64.00"))
        )

        assert result.is_ok()
        assert result.value.price_per_unit == Decimal("64.00")
        assert result.value.product_code == "MILK-1L"

    async def test_delete_refused_when_referenced(self, mock_uow, mock_product_repo):
        mock_product_repo.is_referenced = AsyncMock(return_value=True)

        result = await DeleteProduct(mock_uow, mock_product_repo).execute(5)

        assert result.is_err()
        assert result.error.code == "PRODUCT_IN_USE"
        mock_product_repo.delete.assert_not_called()

    async def test_delete_unused_product(self, mock_uow, mock_product_repo):
        result = await DeleteProduct(mock_uow, mock_product_repo).execute(5)

        assert result.is_ok()
        mock_product_repo.delete.assert_called_once()
        mock_uow.commit.assert_called_once()
