"""Integration tests for authentication and role checks"""

import pytest
from httpx import AsyncClient


async def register(client: AsyncClient, email, phone, role):
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "email": email,
            "password": "secret1",
            "full_name": "Staff Member",
            "phone": phone,
            "role": role,
        },
    )
    assert response.status_code == 201
    return response.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


class TestAuthAPIIntegration:

    @pytest.mark.asyncio
    async def test_register_login_and_profile(self, auth_client: AsyncClient):
        registered = await register(auth_client, "Meera@MilkDelivery.com", "9876543210", "manager")
        assert registered["token_type"] == "bearer"
        assert registered["user"]["email"] == "meera@milkdelivery.com"

        login = await auth_client.post(
            "/api/v1/auth/login",
            json={"email": "meera@milkdelivery.com", "password": "secret1"},
        )
        assert login.status_code == 200
        token = login.json()["access_token"]

        profile = await auth_client.get("/api/v1/auth/profile", headers=bearer(token))
        assert profile.status_code == 200
        assert profile.json()["role"] == "manager"

    @pytest.mark.asyncio
    async def test_duplicate_registration(self, auth_client: AsyncClient):
        await register(auth_client, "ravi@milkdelivery.com", "9876543211", "delivery_person")

        response = await auth_client.post(
            "/api/v1/auth/register",
            json={
                "email": "ravi@milkdelivery.com",
                "password": "secret1",
                "full_name": "Ravi Again",
                "phone": "9876543299",
            },
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "USER_EXISTS"

    @pytest.mark.asyncio
    async def test_wrong_password(self, auth_client: AsyncClient):
        await register(auth_client, "ravi@milkdelivery.com", "9876543211", "delivery_person")

        response = await auth_client.post(
            "/api/v1/auth/login",
            json={"email": "ravi@milkdelivery.com", "password": "wrong-pass"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_missing_and_invalid_token(self, auth_client: AsyncClient):
        missing = await auth_client.get("/api/v1/customers")
        invalid = await auth_client.get("/api/v1/customers", headers=bearer("not-a-token"))

        assert missing.status_code == 401
        assert missing.json()["error"]["code"] == "NOT_AUTHENTICATED"
        assert invalid.status_code == 401
        assert invalid.json()["error"]["code"] == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_delivery_person_cannot_delete_payments(self, auth_client: AsyncClient):
        registered = await register(auth_client, "ravi@milkdelivery.com", "9876543211", "delivery_person")

        response = await auth_client.delete(
            "/api/v1/payments/1", headers=bearer(registered["access_token"])
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_change_password(self, auth_client: AsyncClient):
        registered = await register(auth_client, "asha@milkdelivery.com", "9876543212", "admin")
        headers = bearer(registered["access_token"])

        changed = await auth_client.post(
            "/api/v1/auth/change-password",
            json={"current_password": "secret1", "new_password": "secret2"},
            headers=headers,
        )
        assert changed.status_code == 204

        old = await auth_client.post(
            "/api/v1/auth/login", json={"email": "asha@milkdelivery.com", "password": "secret1"}
        )
        new = await auth_client.post(
            "/api/v1/auth/login", json={"email": "asha@milkdelivery.com", "password": "secret2"}
        )
        assert old.status_code == 401
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_update_own_profile(self, auth_client: AsyncClient):
        registered = await register(auth_client, "meera@milkdelivery.com", "9876543210", "delivery_person")
        other = await register(auth_client, "ravi@milkdelivery.com", "9876543211", "delivery_person")
        headers = bearer(registered["access_token"])

        updated = await auth_client.patch(
            "/api/v1/auth/profile",
            json={"full_name": "Meera Joshi", "phone": "9876500077"},
            headers=headers,
        )
        clash = await auth_client.patch(
            "/api/v1/auth/profile",
            json={"phone": other["user"]["phone"]},
            headers=headers,
        )

        assert updated.status_code == 200
        assert updated.json()["full_name"] == "Meera Joshi"
        assert updated.json()["phone"] == "9876500077"
        assert updated.json()["role"] == "delivery_person"
        assert clash.status_code == 409
        assert clash.json()["error"]["code"] == "DUPLICATE_ENTRY"
