"""Unit tests for Invoice paid / balance bookkeeping"""

from datetime import date, timedelta
from decimal import Decimal
from src.domain.invoice import Invoice, InvoiceStatus


def make_invoice(total="100.00", paid="0.00", due_date=None, status=InvoiceStatus.SENT):
    total = Decimal(total)
    paid = Decimal(paid)
    return Invoice(
        id=1,
        invoice_number="INV-2024-000001",
        customer_id=1,
        status=status,
        billing_period_start=date(2024, 2, 1),
        billing_period_end=date(2024, 2, 29),
        due_date=due_date or date.today() + timedelta(days=10),
        subtotal=total,
        total_amount=total,
        paid_amount=paid,
        balance_amount=total - paid,
    )


class TestApplyPayment:
    """Test Invoice.apply_payment"""

    def test_partial_payment_updates_amounts_and_status(self):
        # Arrange
        invoice = make_invoice(total="100.00")

        # Act
        invoice.apply_payment(Decimal("70.00"))

        # Assert
        assert invoice.paid_amount == Decimal("70.00")
        assert invoice.balance_amount == Decimal("30.00")
        assert invoice.status == InvoiceStatus.PARTIALLY_PAID

    def test_full_payment_marks_invoice_paid(self):
        invoice = make_invoice(total="50.00")

        invoice.apply_payment(Decimal("50.00"))

        assert invoice.paid_amount == Decimal("50.00")
        assert invoice.balance_amount == Decimal("0.00")
        assert invoice.status == InvoiceStatus.PAID

    def test_successive_payments_accumulate(self):
        invoice = make_invoice(total="100.00")

        invoice.apply_payment(Decimal("30.00"))
        invoice.apply_payment(Decimal("70.00"))

        assert invoice.paid_amount == Decimal("100.00")
        assert invoice.balance_amount == Decimal("0.00")
        assert invoice.status == InvoiceStatus.PAID

    def test_balance_always_equals_total_minus_paid(self):
        invoice = make_invoice(total="123.45")

        for amount in ("10.00", "0.45", "13.00"):
            invoice.apply_payment(Decimal(amount))
            assert invoice.balance_amount == invoice.total_amount - invoice.paid_amount

    def test_draft_invoice_keeps_status(self):
        invoice = make_invoice(total="100.00", status=InvoiceStatus.DRAFT)

        invoice.apply_payment(Decimal("100.00"))

        assert invoice.balance_amount == Decimal("0.00")
        assert invoice.status == InvoiceStatus.DRAFT


class TestReversePayment:
    """Test Invoice.reverse_payment"""

    def test_reversal_restores_unpaid_invoice(self):
        """
        Given: Invoice fully paid by one allocation
        When: The allocation is reversed
        Then: paid_amount returns to 0 and status back to sent
        """
        invoice = make_invoice(total="50.00")
        invoice.apply_payment(Decimal("50.00"))

        invoice.reverse_payment(Decimal("50.00"))

        assert invoice.paid_amount == Decimal("0.00")
        assert invoice.balance_amount == Decimal("50.00")
        assert invoice.status == InvoiceStatus.SENT

    def test_partial_reversal_leaves_partially_paid(self):
        invoice = make_invoice(total="100.00", paid="100.00", status=InvoiceStatus.PAID)

        invoice.reverse_payment(Decimal("40.00"))

        assert invoice.paid_amount == Decimal("60.00")
        assert invoice.balance_amount == Decimal("40.00")
        assert invoice.status == InvoiceStatus.PARTIALLY_PAID

    def test_reversal_of_past_due_invoice_marks_overdue(self):
        invoice = make_invoice(
            total="80.00",
            paid="80.00",
            due_date=date.today() - timedelta(days=5),
            status=InvoiceStatus.PAID,
        )

        invoice.reverse_payment(Decimal("80.00"))

        assert invoice.balance_amount == Decimal("80.00")
        assert invoice.status == InvoiceStatus.OVERDUE
