"""Unit tests for DeletePayment use case"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.payments.delete_payment import DeletePayment
from src.domain.invoice import InvoiceStatus
from src.domain.payment_allocation import PaymentAllocation
from tests.unit.use_cases.helpers import make_invoice, returns_argument


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=returns_argument)
    return repo


@pytest.fixture
def mock_payment_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=MagicMock(id=10, payment_code="PAY-2024-000001"))
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_allocation_repo():
    return MagicMock()


@pytest.fixture
def delete_use_case(mock_uow, mock_invoice_repo, mock_payment_repo, mock_allocation_repo):
    return DeletePayment(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        payment_repo=mock_payment_repo,
        allocation_repo=mock_allocation_repo,
    )


def allocation(allocation_id, invoice_id, amount):
    return PaymentAllocation(
        id=allocation_id,
        payment_id=10,
        invoice_id=invoice_id,
        allocated_amount=Decimal(amount),
    )


@pytest.mark.asyncio
class TestDeletePayment:
    """Test payment deletion and allocation reversal"""

    async def test_reverses_every_allocation(
        self, delete_use_case, mock_invoice_repo, mock_payment_repo, mock_allocation_repo, mock_uow
    ):
        """
        Given: A payment split 50 / 70 over two invoices
        When: The payment is deleted
        Then: Both invoices get their balance back and the payment is removed
        """
        # Arrange
        paid = make_invoice(1, "50.00", paid="50.00", status=InvoiceStatus.PAID)
        partial = make_invoice(2, "100.00", paid="70.00", status=InvoiceStatus.PARTIALLY_PAID)
        invoices = {1: paid, 2: partial}
        mock_allocation_repo.get_by_payment_id = AsyncMock(
            return_value=[allocation(100, 1, "50.00"), allocation(101, 2, "70.00")]
        )
        mock_invoice_repo.get_by_id = AsyncMock(side_effect=lambda i, for_update=False: invoices[i])

        # Act
        result = await delete_use_case.execute(10)

        # Assert
        assert result.is_ok()
        assert result.value == 2
        assert paid.paid_amount == Decimal("0.00")
        assert paid.balance_amount == Decimal("50.00")
        assert paid.status == InvoiceStatus.SENT
        assert partial.paid_amount == Decimal("0.00")
        assert partial.balance_amount == Decimal("100.00")
        assert partial.status == InvoiceStatus.SENT
        assert mock_invoice_repo.update.call_count == 2
        mock_payment_repo.delete.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_payment_without_allocations(
        self, delete_use_case, mock_invoice_repo, mock_payment_repo, mock_allocation_repo, mock_uow
    ):
        mock_allocation_repo.get_by_payment_id = AsyncMock(return_value=[])
        mock_invoice_repo.get_by_id = AsyncMock()

        result = await delete_use_case.execute(10)

        assert result.is_ok()
        assert result.value == 0
        mock_invoice_repo.get_by_id.assert_not_called()
        mock_payment_repo.delete.assert_called_once()
        mock_uow.commit.assert_called_once()

    async def test_unknown_payment(self, delete_use_case, mock_payment_repo, mock_uow):
        mock_payment_repo.get_by_id = AsyncMock(return_value=None)

        result = await delete_use_case.execute(999)

        assert result.is_err()
        assert result.error.code == "PAYMENT_NOT_FOUND"
        mock_payment_repo.delete.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_missing_invoice_rolls_back(
        self, delete_use_case, mock_invoice_repo, mock_payment_repo, mock_allocation_repo, mock_uow
    ):
        mock_allocation_repo.get_by_payment_id = AsyncMock(return_value=[allocation(100, 1, "50.00")])
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await delete_use_case.execute(10)

        assert result.is_err()
        assert result.error.code == "DELETE_PAYMENT_FAILED"
        mock_payment_repo.delete.assert_not_called()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
