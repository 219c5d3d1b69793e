"""Authentication Use Cases

Registration, login, profile lookup and update, and password change. Passwords are
only ever handled through the PasswordHasher.
"""

import logging
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.security import PasswordHasher, TokenService
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases.errors import constraint_violation_error
from src.domain.user import User
from .dtos import (
    RegisterUserCommandDTO,
    LoginCommandDTO,
    ChangePasswordCommandDTO,
    UpdateProfileCommandDTO,
    UserResponseDTO,
    AuthResponseDTO,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error(
    code="INVALID_CREDENTIALS",
    message="Invalid email or password",
)


def to_user_response(user: User) -> UserResponseDTO:
    return UserResponseDTO(
        user_id=user.id,
        email=user.email,
        full_name=user.full_name,
        phone=user.phone,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
    )


class RegisterUser:
    """
    Use Case: Register a staff user

    Business Rules:
    1. Email and phone are unique across users
    2. Password is stored as a bcrypt hash only
    3. The new user is signed in straight away
    """

    def __init__(
        self,
        uow: UnitOfWork,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.uow = uow
        self.user_repo = user_repo
        self.hasher = hasher
        self.tokens = tokens

    async def execute(self, command: RegisterUserCommandDTO) -> Result[AuthResponseDTO]:
        try:
            if await self.user_repo.exists_by_email_or_phone(command.email, command.phone):
                return Return.err(
                    Error(
                        code="USER_EXISTS",
                        message="User with this email or phone already exists",
                    )
                )

            user = await self.user_repo.create(
                User(
                    email=command.email,
                    password_hash=self.hasher.hash(command.password),
                    full_name=command.full_name,
                    phone=command.phone,
                    role=command.role,
                )
            )
            await self.uow.commit()

            logger.info(f"Registered user {user.email} with role {user.role.value}")

            return Return.ok(
                AuthResponseDTO(
                    access_token=self.tokens.issue(user),
                    user=to_user_response(user),
                )
            )

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REGISTER_FAILED",
                    message="Failed to register user",
                    reason=str(e),
                )
            )


class Login:
    """
    Use Case: Exchange email and password for an access token

    Unknown email and wrong password yield the same error.
    Deactivated users are refused even with a correct password.
    """

    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher, tokens: TokenService):
        self.user_repo = user_repo
        self.hasher = hasher
        self.tokens = tokens

    async def execute(self, command: LoginCommandDTO) -> Result[AuthResponseDTO]:
        try:
            user = await self.user_repo.get_by_email(command.email)
            if not user or not self.hasher.verify(command.password, user.password_hash):
                logger.warning(f"Failed login attempt for {command.email}")
                return Return.err(INVALID_CREDENTIALS)

            if not user.is_active:
                return Return.err(
                    Error(
                        code="USER_INACTIVE",
                        message="User account is deactivated",
                    )
                )

            return Return.ok(
                AuthResponseDTO(
                    access_token=self.tokens.issue(user),
                    user=to_user_response(user),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LOGIN_FAILED",
                    message="Failed to log in",
                    reason=str(e),
                )
            )


class GetProfile:

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def execute(self, user_id: int) -> Result[UserResponseDTO]:
        try:
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                return Return.err(
                    Error(
                        code="USER_NOT_FOUND",
                        message=f"User {user_id} not found",
                    )
                )
            return Return.ok(to_user_response(user))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_PROFILE_FAILED",
                    message="Failed to retrieve profile",
                    reason=str(e),
                )
            )


class UpdateProfile:
    """
    Use Case: Change the caller's own name or phone

    Phone numbers are unique across accounts; a clash is DUPLICATE_ENTRY.
    """

    def __init__(self, uow: UnitOfWork, user_repo: UserRepository):
        self.uow = uow
        self.user_repo = user_repo

    async def execute(self, user_id: int, command: UpdateProfileCommandDTO) -> Result[UserResponseDTO]:
        try:
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                return Return.err(
                    Error(
                        code="USER_NOT_FOUND",
                        message=f"User {user_id} not found",
                    )
                )

            for field, value in command.model_dump(exclude_none=True).items():
                setattr(user, field, value)

            user = await self.user_repo.update(user)
            await self.uow.commit()
            return Return.ok(to_user_response(user))

        except IntegrityError as e:
            await self.uow.rollback()
            return Return.err(constraint_violation_error(e))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_PROFILE_FAILED",
                    message="Failed to update profile",
                    reason=str(e),
                )
            )


class ChangePassword:

    def __init__(self, uow: UnitOfWork, user_repo: UserRepository, hasher: PasswordHasher):
        self.uow = uow
        self.user_repo = user_repo
        self.hasher = hasher

    async def execute(self, user_id: int, command: ChangePasswordCommandDTO) -> Result[None]:
        try:
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                return Return.err(
                    Error(
                        code="USER_NOT_FOUND",
                        message=f"User {user_id} not found",
                    )
                )

            if not self.hasher.verify(command.current_password, user.password_hash):
                return Return.err(
                    Error(
                        code="INVALID_CREDENTIALS",
                        message="Current password is incorrect",
                    )
                )

            user.password_hash = self.hasher.hash(command.new_password)
            await self.user_repo.update(user)
            await self.uow.commit()

            logger.info(f"Password changed for user {user.email}")

            return Return.ok()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CHANGE_PASSWORD_FAILED",
                    message="Failed to change password",
                    reason=str(e),
                )
            )
