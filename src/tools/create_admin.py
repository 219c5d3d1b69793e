"""Create or reset the administrator account

Usage:
    python -m src.tools.create_admin --password 'new-secret'
    python -m src.tools.create_admin --email boss@example.com --phone 9000000000
"""

import argparse
import asyncio
import getpass
import logging

from config import ApplicationConfig
from src.adapter.repositories import SqlAlchemyUserRepository
from src.adapter.services.database import Database
from src.adapter.services.security import BcryptPasswordHasher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.user import User, UserRole

logger = logging.getLogger(__name__)


async def create_admin(
    database: Database,
    email: str,
    password: str,
    full_name: str = "Administrator",
    phone: str = "0000000000",
    rounds: int = ApplicationConfig.BCRYPT_ROUNDS,
) -> User:
    """
    Ensure an active admin user with the given email and password exists

    An existing user with that email is promoted to admin, re-activated and
    given the new password.
    """
    hasher = BcryptPasswordHasher(rounds=rounds)

    async with database.session() as session:
        uow = SqlAlchemyUnitOfWork(session)
        user_repo = SqlAlchemyUserRepository(session)

        user = await user_repo.get_by_email(email)
        if user:
            user.password_hash = hasher.hash(password)
            user.role = UserRole.ADMIN
            user.is_active = True
            user = await user_repo.update(user)
            logger.info(f"Reset admin account {email}")
        else:
            user = await user_repo.create(
                User(
                    email=email,
                    password_hash=hasher.hash(password),
                    full_name=full_name,
                    phone=phone,
                    role=UserRole.ADMIN,
                )
            )
            logger.info(f"Created admin account {email}")

        await uow.commit()
        return user


async def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Create or reset the admin account")
    parser.add_argument("--email", default=ApplicationConfig.ADMIN_EMAIL)
    parser.add_argument("--password", help="Prompted for when omitted")
    parser.add_argument("--full-name", default="Administrator")
    parser.add_argument("--phone", default="0000000000")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Admin password: ")
    if len(password) < 6:
        parser.error("password must be at least 6 characters")

    database = Database(ApplicationConfig.DB_URI)
    await database.connect(create_tables=True)
    try:
        user = await create_admin(
            database,
            email=args.email.strip().lower(),
            password=password,
            full_name=args.full_name,
            phone=args.phone,
        )
        print(f"Admin ready: {user.email} (id={user.id})")
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
