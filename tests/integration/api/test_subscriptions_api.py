"""Integration tests for Subscription API endpoints"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from sqlmodel import select
from src.domain.delivery import Delivery


def weekly_plan(customer_id, product_id, **overrides):
    body = {
        "customer_id": customer_id,
        "product_id": product_id,
        "plan_name": "Morning milk",
        "plan_type": "weekly",
        "start_date": "2024-03-01",
        "schedule": [
            {"day_of_week": 0, "quantity": "2"},
            {"day_of_week": 3, "quantity": "1"},
        ],
    }
    body.update(overrides)
    return body


class TestSubscriptionAPIIntegration:

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, client: AsyncClient, customer, product):
        created = await client.post("/api/v1/subscriptions", json=weekly_plan(customer.id, product.id))

        assert created.status_code == 201
        data = created.json()
        assert data["status"] == "active"
        assert [row["day_of_week"] for row in data["schedule"]] == [0, 3]
        assert all(row["effective_from"] == "2024-03-01" for row in data["schedule"])

        fetched = await client.get(f"/api/v1/subscriptions/{data['subscription_id']}")
        assert fetched.status_code == 200
        assert fetched.json()["plan_name"] == "Morning milk"

        listed = await client.get(f"/api/v1/customers/{customer.id}/subscriptions")
        assert listed.status_code == 200
        assert listed.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_schedule_must_fit_plan_type(self, client: AsyncClient, customer, product):
        response = await client.post(
            "/api/v1/subscriptions",
            json=weekly_plan(customer.id, product.id, schedule=[{"day_of_month": 5, "quantity": "1"}]),
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SCHEDULE"

    @pytest.mark.asyncio
    async def test_unknown_product(self, client: AsyncClient, customer):
        response = await client.post("/api/v1/subscriptions", json=weekly_plan(customer.id, 999))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PRODUCT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_pause_resume_cancel(self, client: AsyncClient, customer, product):
        """
        Given: An active plan
        When: It is paused, resumed and cancelled
        Then: Each step succeeds, cancelling sets an end date and the plan is then final
        """
        # Arrange
        created = await client.post("/api/v1/subscriptions", json=weekly_plan(customer.id, product.id))
        plan_id = created.json()["subscription_id"]

        # Act
        paused = await client.post(f"/api/v1/subscriptions/{plan_id}/pause")
        paused_again = await client.post(f"/api/v1/subscriptions/{plan_id}/pause")
        resumed = await client.post(f"/api/v1/subscriptions/{plan_id}/resume")
        cancelled = await client.post(f"/api/v1/subscriptions/{plan_id}/cancel")
        reopened = await client.post(f"/api/v1/subscriptions/{plan_id}/resume")

        # Assert
        assert paused.json()["status"] == "paused"
        assert paused_again.status_code == 409
        assert paused_again.json()["error"]["code"] == "INVALID_SUBSCRIPTION_STATUS"
        assert resumed.json()["status"] == "active"
        assert cancelled.json()["status"] == "cancelled"
        assert cancelled.json()["end_date"] is not None
        assert reopened.status_code == 409

        cancelled_only = await client.get("/api/v1/subscriptions", params={"status": "cancelled"})
        assert cancelled_only.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_replace_schedule_keeps_only_new_rows_active(
        self, client: AsyncClient, customer, product
    ):
        created = await client.post("/api/v1/subscriptions", json=weekly_plan(customer.id, product.id))
        plan_id = created.json()["subscription_id"]

        replaced = await client.put(
            f"/api/v1/subscriptions/{plan_id}/schedule",
            json={"schedule": [{"day_of_week": 5, "quantity": "3"}]},
        )
        fetched = await client.get(f"/api/v1/subscriptions/{plan_id}")

        assert replaced.status_code == 200
        assert [row["day_of_week"] for row in fetched.json()["schedule"]] == [5]
        assert Decimal(fetched.json()["schedule"][0]["quantity"]) == Decimal("3")

    @pytest.mark.asyncio
    async def test_update_end_date(self, client: AsyncClient, customer, product):
        created = await client.post("/api/v1/subscriptions", json=weekly_plan(customer.id, product.id))
        plan_id = created.json()["subscription_id"]

        updated = await client.patch(
            f"/api/v1/subscriptions/{plan_id}", json={"end_date": "2024-06-30", "plan_name": "Summer milk"}
        )
        too_early = await client.patch(f"/api/v1/subscriptions/{plan_id}", json={"end_date": "2024-01-01"})

        assert updated.status_code == 200
        assert updated.json()["end_date"] == "2024-06-30"
        assert updated.json()["plan_name"] == "Summer milk"
        assert too_early.status_code == 400
        assert too_early.json()["error"]["code"] == "INVALID_END_DATE"

    @pytest.mark.asyncio
    async def test_delete_keeps_linked_deliveries(
        self, client: AsyncClient, db_session, customer, product
    ):
        created = await client.post("/api/v1/subscriptions", json=weekly_plan(customer.id, product.id))
        plan_id = created.json()["subscription_id"]
        delivery = await client.post(
            "/api/v1/deliveries",
            json={
                "customer_id": customer.id,
                "product_id": product.id,
                "scheduled_date": "2024-03-04",
                "quantity": "2",
                "subscription_plan_id": plan_id,
            },
        )
        assert delivery.status_code == 201
        assert delivery.json()["subscription_plan_id"] == plan_id

        deleted = await client.delete(f"/api/v1/subscriptions/{plan_id}")
        missing = await client.get(f"/api/v1/subscriptions/{plan_id}")

        assert deleted.status_code == 204
        assert missing.status_code == 404
        result = await db_session.execute(select(Delivery))
        kept = result.scalars().all()
        assert len(kept) == 1
        await db_session.refresh(kept[0])
        assert kept[0].subscription_plan_id is None

    @pytest.mark.asyncio
    async def test_delivery_plan_must_match_customer(self, client: AsyncClient, customer, product):
        created = await client.post("/api/v1/subscriptions", json=weekly_plan(customer.id, product.id))
        other = await client.post(
            "/api/v1/customers",
            json={
                "full_name": "Ravi Kulkarni",
                "phone": "9876500002",
                "area_id": customer.area_id,
                "address_line1": "2 Paud Road",
                "city": "Pune",
                "pincode": "411038",
            },
        )

        response = await client.post(
            "/api/v1/deliveries",
            json={
                "customer_id": other.json()["customer_id"],
                "product_id": product.id,
                "scheduled_date": "2024-03-04",
                "quantity": "1",
                "subscription_plan_id": created.json()["subscription_id"],
            },
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SUBSCRIPTION_NOT_FOUND"
