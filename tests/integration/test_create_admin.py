"""Integration tests for the admin bootstrap tool"""

import pytest

from src.adapter.repositories import SqlAlchemyUserRepository
from src.adapter.services.security import BcryptPasswordHasher
from src.domain.user import User, UserRole
from src.tools.create_admin import create_admin


@pytest.mark.asyncio
class TestCreateAdmin:

    async def test_creates_admin(self, database):
        user = await create_admin(database, "admin@milkdelivery.com", "secret1", rounds=4)

        assert user.id is not None
        assert user.role == UserRole.ADMIN
        assert BcryptPasswordHasher().verify("secret1", user.password_hash)

    async def test_promotes_and_reactivates_existing_user(self, database, db_session):
        await SqlAlchemyUserRepository(db_session).create(
            User(
                email="admin@milkdelivery.com",
                password_hash="x",
                full_name="Former Driver",
                phone="9876543219",
                role=UserRole.DELIVERY_PERSON,
                is_active=False,
            )
        )
        await db_session.commit()

        user = await create_admin(database, "admin@milkdelivery.com", "secret2", rounds=4)

        assert user.role == UserRole.ADMIN
        assert user.is_active
        assert user.full_name == "Former Driver"
        assert BcryptPasswordHasher().verify("secret2", user.password_hash)
