"""Integration tests for the delivery to invoice to payment flow"""

import pytest
from decimal import Decimal
from httpx import AsyncClient


async def create_catalog_and_customer(client: AsyncClient):
    area = await client.post("/api/v1/areas", json={"name": "Baner", "code": "bnr"})
    assert area.status_code == 201
    assert area.json()["code"] == "BNR"

    product = await client.post(
        "/api/v1/products",
        json={
            "product_code": "MILK-COW-1L",
            "product_name": "Cow Milk 1L",
            "unit": "L",
            "price_per_unit": "60.00",
        },
    )
    assert product.status_code == 201

    customer = await client.post(
        "/api/v1/customers",
        json={
            "full_name": "Anita Deshmukh",
            "phone": "9822012345",
            "area_id": area.json()["area_id"],
            "address_line1": "Flat 4B, Sai Residency",
            "city": "Pune",
            "pincode": "411045",
        },
    )
    assert customer.status_code == 201
    return area.json(), product.json(), customer.json()


async def deliver(client: AsyncClient, customer_id, product_id, day, quantity):
    scheduled = await client.post(
        "/api/v1/deliveries",
        json={
            "customer_id": customer_id,
            "product_id": product_id,
            "scheduled_date": f"2024-02-{day:02d}",
            "quantity": quantity,
        },
    )
    assert scheduled.status_code == 201
    completed = await client.post(
        f"/api/v1/deliveries/{scheduled.json()['delivery_id']}/complete", json={}
    )
    assert completed.status_code == 200
    assert completed.json()["delivery_status"] == "delivered"
    return completed.json()


class TestInvoicingFlowAPIIntegration:

    @pytest.mark.asyncio
    async def test_deliveries_invoice_payment_outstanding(self, client: AsyncClient):
        """
        Given: Two delivered and one missed delivery in February
        When: The month is invoiced and partly paid
        Then: Only delivered milk is billed and the remainder is outstanding
        """
        # Arrange
        _, product, customer = await create_catalog_and_customer(client)
        customer_id = customer["customer_id"]
        await deliver(client, customer_id, product["product_id"], 1, "1")
        await deliver(client, customer_id, product["product_id"], 2, "2")
        missed = await client.post(
            "/api/v1/deliveries",
            json={
                "customer_id": customer_id,
                "product_id": product["product_id"],
                "scheduled_date": "2024-02-03",
                "quantity": "1",
            },
        )
        await client.post(f"/api/v1/deliveries/{missed.json()['delivery_id']}/missed", json={})

        # Act - invoice the month
        generated = await client.post(
            "/api/v1/invoices/generate",
            json={
                "customer_id": customer_id,
                "billing_period_start": "2024-02-01",
                "billing_period_end": "2024-02-29",
            },
        )

        # Assert - only delivered deliveries billed
        assert generated.status_code == 201
        invoice = generated.json()
        assert Decimal(invoice["total_amount"]) == Decimal("180.00")
        assert len(invoice["lines"]) == 2
        assert invoice["due_date"] == "2024-03-15"

        # Re-running finds nothing left to bill
        again = await client.post(
            "/api/v1/invoices/generate",
            json={
                "customer_id": customer_id,
                "billing_period_start": "2024-02-01",
                "billing_period_end": "2024-02-29",
            },
        )
        assert again.status_code == 400
        assert again.json()["error"]["code"] == "NO_BILLABLE_DELIVERIES"

        # Act - partial payment
        paid = await client.post(
            "/api/v1/payments",
            json={"customer_id": customer_id, "amount": "100.00", "payment_method": "cash"},
        )
        assert paid.status_code == 201

        # Assert - invoice and outstanding reflect payment
        detail = await client.get(f"/api/v1/invoices/{invoice['invoice_id']}")
        assert detail.json()["status"] == "partially_paid"
        assert Decimal(detail.json()["balance_amount"]) == Decimal("80.00")
        assert len(detail.json()["payments"]) == 1

        outstanding = await client.get(
            f"/api/v1/customers/{customer_id}/outstanding", params={"as_of": "2024-03-10"}
        )
        assert outstanding.status_code == 200
        assert Decimal(outstanding.json()["total_outstanding"]) == Decimal("80.00")
        assert Decimal(outstanding.json()["current_amount"]) == Decimal("80.00")

        late = await client.get(
            f"/api/v1/customers/{customer_id}/outstanding", params={"as_of": "2024-05-01"}
        )
        assert Decimal(late.json()["days_31_60"]) == Decimal("80.00")

        customer_payments = await client.get(f"/api/v1/customers/{customer_id}/payments")
        assert customer_payments.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_invoice_with_payments_cannot_be_deleted(self, client: AsyncClient):
        _, product, customer = await create_catalog_and_customer(client)
        created = await client.post(
            "/api/v1/invoices",
            json={
                "customer_id": customer["customer_id"],
                "billing_period_start": "2024-02-01",
                "billing_period_end": "2024-02-29",
                "lines": [{"product_id": product["product_id"], "quantity": "10"}],
            },
        )
        assert created.status_code == 201
        invoice_id = created.json()["invoice_id"]
        await client.post(
            "/api/v1/payments",
            json={"customer_id": customer["customer_id"], "amount": "50.00", "payment_method": "upi"},
        )

        response = await client.delete(f"/api/v1/invoices/{invoice_id}")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVOICE_HAS_PAYMENTS"

    @pytest.mark.asyncio
    async def test_unpaid_invoice_can_be_deleted(self, client: AsyncClient):
        _, product, customer = await create_catalog_and_customer(client)
        created = await client.post(
            "/api/v1/invoices",
            json={
                "customer_id": customer["customer_id"],
                "billing_period_start": "2024-02-01",
                "billing_period_end": "2024-02-29",
                "lines": [{"product_id": product["product_id"], "quantity": "10"}],
            },
        )
        invoice_id = created.json()["invoice_id"]

        response = await client.delete(f"/api/v1/invoices/{invoice_id}")

        assert response.status_code == 204
        assert (await client.get(f"/api/v1/invoices/{invoice_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_invoice_pdf(self, client: AsyncClient):
        _, product, customer = await create_catalog_and_customer(client)
        created = await client.post(
            "/api/v1/invoices",
            json={
                "customer_id": customer["customer_id"],
                "billing_period_start": "2024-02-01",
                "billing_period_end": "2024-02-29",
                "lines": [{"product_id": product["product_id"], "quantity": "29"}],
            },
        )

        response = await client.get(f"/api/v1/invoices/{created.json()['invoice_id']}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_reports(self, client: AsyncClient):
        _, product, customer = await create_catalog_and_customer(client)
        await client.post(
            "/api/v1/invoices",
            json={
                "customer_id": customer["customer_id"],
                "billing_period_start": "2024-02-01",
                "billing_period_end": "2024-02-29",
                "lines": [{"product_id": product["product_id"], "quantity": "5"}],
            },
        )

        aging = await client.get("/api/v1/reports/aging", params={"as_of": "2024-04-20"})
        assert aging.status_code == 200
        assert aging.json()["customers"][0]["customer_id"] == customer["customer_id"]
        assert Decimal(aging.json()["totals"]["days_31_60"]) == Decimal("300.00")

        dashboard = await client.get("/api/v1/reports/dashboard")
        assert dashboard.status_code == 200
        assert dashboard.json()["active_customers"] == 1
        assert dashboard.json()["active_areas"] == 1
        assert Decimal(dashboard.json()["total_outstanding"]) == Decimal("300.00")

    @pytest.mark.asyncio
    async def test_customer_validation(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/customers",
            json={
                "full_name": "No Area",
                "phone": "12345",
                "area_id": 1,
                "address_line1": "Somewhere",
                "city": "Pune",
                "pincode": "411001",
            },
        )

        assert response.status_code == 422
