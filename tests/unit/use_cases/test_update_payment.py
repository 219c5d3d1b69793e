"""Unit tests for UpdatePayment use case"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.payments.dtos import UpdatePaymentCommandDTO
from src.app.use_cases.payments.update_payment import UpdatePayment
from src.domain.payment import Payment, PaymentMethod, PaymentStatus
from tests.unit.use_cases.helpers import returns_argument


@pytest.fixture
def payment():
    return Payment(
        id=10,
        payment_code="PAY-2024-000010",
        customer_id=1,
        amount=Decimal("120.00"),
        payment_date=date(2024, 3, 5),
        payment_method=PaymentMethod.UPI,
    )


@pytest.fixture
def mock_payment_repo(payment):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=payment)
    repo.update = AsyncMock(side_effect=returns_argument)
    return repo


@pytest.fixture
def mock_allocation_repo():
    repo = MagicMock()
    repo.get_by_payment_id = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def update_use_case(mock_uow, mock_payment_repo, mock_allocation_repo):
    return UpdatePayment(
        uow=mock_uow,
        payment_repo=mock_payment_repo,
        allocation_repo=mock_allocation_repo,
    )


@pytest.mark.asyncio
class TestUpdatePayment:

    async def test_updates_reference_and_notes(self, update_use_case, mock_uow, payment):
        result = await update_use_case.execute(
            10, UpdatePaymentCommandDTO(transaction_reference="UPI-88213", notes="Paid at door")
        )

        assert result.is_ok()
        assert result.value.transaction_reference == "UPI-88213"
        assert result.value.notes == "Paid at door"
        assert payment.payment_status == PaymentStatus.COMPLETED
        mock_uow.commit.assert_called_once()

    @pytest.mark.parametrize("new_status", [PaymentStatus.REFUNDED, PaymentStatus.FAILED])
    async def test_allocated_payment_cannot_become_unsettled(
        self, update_use_case, mock_allocation_repo, mock_payment_repo, mock_uow, payment, new_status
    ):
        """
        Given: A payment applied to an invoice
        When: Its status is set to refunded or failed
        Then: The change is refused and the payment keeps its status
        """
        # Arrange
        mock_allocation_repo.get_by_payment_id = AsyncMock(return_value=[MagicMock()])

        # Act
        result = await update_use_case.execute(10, UpdatePaymentCommandDTO(payment_status=new_status))

        # Assert
        assert result.is_err()
        assert result.error.code == "PAYMENT_HAS_ALLOCATIONS"
        assert payment.payment_status == PaymentStatus.COMPLETED
        mock_payment_repo.update.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_unallocated_payment_can_be_refunded(
        self, update_use_case, mock_allocation_repo, payment
    ):
        result = await update_use_case.execute(
            10, UpdatePaymentCommandDTO(payment_status=PaymentStatus.REFUNDED)
        )

        assert result.is_ok()
        assert payment.payment_status == PaymentStatus.REFUNDED
        mock_allocation_repo.get_by_payment_id.assert_called_once_with(10)

    async def test_pending_status_skips_allocation_check(self, update_use_case, mock_allocation_repo):
        result = await update_use_case.execute(
            10, UpdatePaymentCommandDTO(payment_status=PaymentStatus.PENDING)
        )

        assert result.is_ok()
        mock_allocation_repo.get_by_payment_id.assert_not_called()

    async def test_payment_not_found(self, update_use_case, mock_payment_repo):
        mock_payment_repo.get_by_id = AsyncMock(return_value=None)

        result = await update_use_case.execute(99, UpdatePaymentCommandDTO(notes="x"))

        assert result.is_err()
        assert result.error.code == "PAYMENT_NOT_FOUND"
