"""Unit tests for entity timestamp columns"""

from datetime import date, timezone
from decimal import Decimal
from sqlalchemy import DateTime

from src.domain import Area, Customer, Delivery, Invoice, Payment, PaymentAllocation, Product, User
from src.domain.payment import PaymentMethod


class TestTimestamps:
    """Timestamps are timezone-aware in memory and in the schema"""

    def test_new_entities_get_aware_utc_timestamps(self):
        payment = Payment(
            payment_code="PAY-2024-000001",
            customer_id=1,
            amount=Decimal("10.00"),
            payment_date=date(2024, 3, 1),
            payment_method=PaymentMethod.CASH,
        )
        area = Area(name="Kothrud", code="KTH")

        for entity in (payment, area):
            assert entity.created_at.tzinfo is not None
            assert entity.created_at.utcoffset() == timezone.utc.utcoffset(None)
            assert entity.updated_at.tzinfo is not None

    def test_applying_a_payment_stamps_an_aware_update_time(self):
        invoice = Invoice(
            invoice_number="INV-2024-000001",
            customer_id=1,
            billing_period_start=date(2024, 2, 1),
            billing_period_end=date(2024, 2, 29),
            due_date=date(2024, 3, 15),
            subtotal=Decimal("100.00"),
            total_amount=Decimal("100.00"),
            balance_amount=Decimal("100.00"),
        )

        invoice.apply_payment(Decimal("40.00"))

        assert invoice.updated_at.tzinfo is not None

    def test_timestamp_columns_store_timezone(self):
        for model in (Area, Customer, Delivery, Invoice, Payment, PaymentAllocation, Product, User):
            for name in ("created_at", "updated_at"):
                if name not in model.__table__.c:
                    continue
                column_type = model.__table__.c[name].type
                assert isinstance(column_type, DateTime)
                assert column_type.timezone is True, f"{model.__name__}.{name}"

        assert Delivery.__table__.c["delivered_at"].type.timezone is True
