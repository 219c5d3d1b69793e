"""Integration tests for Payment API endpoints"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from sqlmodel import select, func
from src.domain.payment import Payment


async def count_payments(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(Payment))
    return result.scalar()


class TestPaymentAPIIntegration:
    """Integration test suite for Payment API endpoints"""

    @pytest.mark.asyncio
    async def test_record_payment_auto_allocates(
        self, client: AsyncClient, customer, make_invoice
    ):
        """POST /payments without allocations pays the oldest invoice first"""
        # Arrange
        older = await make_invoice(customer.id, "50.00", due_in_days=1)
        newer = await make_invoice(customer.id, "100.00", due_in_days=15)

        # Act
        response = await client.post(
            "/api/v1/payments",
            json={"customer_id": customer.id, "amount": "120.00", "payment_method": "cash"},
        )

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["payment_code"].startswith("PAY-")
        assert data["payment_status"] == "completed"
        assert [a["invoice_id"] for a in data["allocations"]] == [older.id, newer.id]
        assert [Decimal(a["allocated_amount"]) for a in data["allocations"]] == [
            Decimal("50.00"),
            Decimal("70.00"),
        ]
        assert Decimal(data["unallocated_amount"]) == Decimal("0")

    @pytest.mark.asyncio
    async def test_record_payment_rejects_non_positive_amount(
        self, client: AsyncClient, db_session, customer
    ):
        """POST /payments with amount <= 0 returns 422 and stores nothing"""
        for amount in ("0", "-10.00"):
            response = await client.post(
                "/api/v1/payments",
                json={"customer_id": customer.id, "amount": amount, "payment_method": "cash"},
            )
            assert response.status_code == 422

        assert await count_payments(db_session) == 0

    @pytest.mark.asyncio
    async def test_explicit_allocation_over_balance_is_rejected(
        self, client: AsyncClient, db_session, customer, make_invoice
    ):
        invoice = await make_invoice(customer.id, "50.00")

        response = await client.post(
            "/api/v1/payments",
            json={
                "customer_id": customer.id,
                "amount": "80.00",
                "payment_method": "upi",
                "invoice_allocations": [{"invoice_id": invoice.id, "amount": "80.00"}],
            },
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ALLOCATION_EXCEEDS_BALANCE"
        assert await count_payments(db_session) == 0

    @pytest.mark.asyncio
    async def test_allocation_amount_with_three_decimals_is_rejected(
        self, client: AsyncClient, db_session, customer, make_invoice
    ):
        """An allocation amount like 10.005 is a 422, not a server error"""
        invoice = await make_invoice(customer.id, "50.00")

        response = await client.post(
            "/api/v1/payments",
            json={
                "customer_id": customer.id,
                "amount": "20.00",
                "payment_method": "cash",
                "invoice_allocations": [{"invoice_id": invoice.id, "amount": "10.005"}],
            },
        )

        assert response.status_code == 422
        assert await count_payments(db_session) == 0

    @pytest.mark.asyncio
    async def test_explicit_allocation_to_unknown_invoice(
        self, client: AsyncClient, customer
    ):
        response = await client.post(
            "/api/v1/payments",
            json={
                "customer_id": customer.id,
                "amount": "10.00",
                "payment_method": "cash",
                "invoice_allocations": [{"invoice_id": 9999, "amount": "10.00"}],
            },
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVOICE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_customer(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/payments",
            json={"customer_id": 9999, "amount": "10.00", "payment_method": "cash"},
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CUSTOMER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_and_delete_payment(self, client: AsyncClient, customer, make_invoice):
        """DELETE /payments/{id} returns 204, afterwards the payment is gone"""
        # Arrange
        invoice = await make_invoice(customer.id, "100.00")
        created = await client.post(
            "/api/v1/payments",
            json={"customer_id": customer.id, "amount": "40.00", "payment_method": "cash"},
        )
        payment_id = created.json()["payment_id"]

        fetched = await client.get(f"/api/v1/payments/{payment_id}")
        assert fetched.status_code == 200
        assert fetched.json()["allocations"][0]["invoice_number"] == invoice.invoice_number

        # Act
        deleted = await client.delete(f"/api/v1/payments/{payment_id}")

        # Assert
        assert deleted.status_code == 204
        assert (await client.get(f"/api/v1/payments/{payment_id}")).status_code == 404
        assert (await client.delete(f"/api/v1/payments/{payment_id}")).status_code == 404

        invoice_response = await client.get(f"/api/v1/invoices/{invoice.id}")
        assert Decimal(invoice_response.json()["balance_amount"]) == Decimal("100.00")
        assert invoice_response.json()["payments"] == []

    @pytest.mark.asyncio
    async def test_list_and_update_payments(self, client: AsyncClient, customer):
        for amount in ("10.00", "20.00"):
            await client.post(
                "/api/v1/payments",
                json={"customer_id": customer.id, "amount": amount, "payment_method": "upi"},
            )

        listing = await client.get("/api/v1/payments", params={"customer_id": customer.id})
        assert listing.status_code == 200
        assert listing.json()["total"] == 2

        payment_id = listing.json()["payments"][0]["payment_id"]
        updated = await client.patch(
            f"/api/v1/payments/{payment_id}",
            json={"transaction_reference": "UPI-REF-881", "notes": "Paid via PhonePe"},
        )
        assert updated.status_code == 200
        assert updated.json()["transaction_reference"] == "UPI-REF-881"

    @pytest.mark.asyncio
    async def test_pending_collections(self, client: AsyncClient, customer, make_invoice):
        await make_invoice(customer.id, "75.00", due_in_days=-3)

        response = await client.get("/api/v1/payments/pending")

        assert response.status_code == 200
        rows = response.json()
        assert len(rows) == 1
        assert rows[0]["customer_id"] == customer.id
        assert Decimal(rows[0]["total_pending"]) == Decimal("75.00")

    @pytest.mark.asyncio
    async def test_allocated_payment_cannot_be_marked_refunded(
        self, client: AsyncClient, customer, make_invoice
    ):
        """PATCH to refunded is refused while the payment still pays an invoice"""
        invoice = await make_invoice(customer.id, "60.00")
        created = await client.post(
            "/api/v1/payments",
            json={"customer_id": customer.id, "amount": "60.00", "payment_method": "cash"},
        )
        payment_id = created.json()["payment_id"]

        response = await client.patch(
            f"/api/v1/payments/{payment_id}", json={"payment_status": "refunded"}
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "PAYMENT_HAS_ALLOCATIONS"
        invoice_response = await client.get(f"/api/v1/invoices/{invoice.id}")
        assert invoice_response.json()["status"] == "paid"
