"""Unit tests for authentication use cases and security services"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import IntegrityError

from src.adapter.services.security import BcryptPasswordHasher, JwtTokenService
from src.app.services.security import InvalidTokenError
from src.app.use_cases.auth.auth import RegisterUser, Login, ChangePassword, UpdateProfile
from src.app.use_cases.auth.dtos import (
    RegisterUserCommandDTO,
    LoginCommandDTO,
    ChangePasswordCommandDTO,
    UpdateProfileCommandDTO,
)
from src.domain.user import User, UserRole


def make_user(is_active=True, role=UserRole.MANAGER):
    return User(
        id=7,
        email="meera@milkdelivery.com",
        password_hash="hashed:secret1",
        full_name="Meera Joshi",
        phone="9876543210",
        role=role,
        is_active=is_active,
    )


@pytest.fixture
def mock_hasher():
    hasher = MagicMock()
    hasher.hash = MagicMock(side_effect=lambda password: f"hashed:{password}")
    hasher.verify = MagicMock(side_effect=lambda password, hashed: hashed == f"hashed:{password}")
    return hasher


@pytest.fixture
def mock_tokens():
    tokens = MagicMock()
    tokens.issue = MagicMock(return_value="token-abc")
    return tokens


@pytest.fixture
def mock_user_repo():
    return MagicMock()


@pytest.mark.asyncio
class TestRegisterUser:
    """Test staff registration"""

    async def test_registers_and_signs_in(self, mock_uow, mock_user_repo, mock_hasher, mock_tokens):
        # Arrange
        mock_user_repo.exists_by_email_or_phone = AsyncMock(return_value=False)

        async def create(user):
            user.id = 7
            return user

        mock_user_repo.create = AsyncMock(side_effect=create)
        use_case = RegisterUser(mock_uow, mock_user_repo, mock_hasher, mock_tokens)

        # Act
        result = await use_case.execute(
            RegisterUserCommandDTO(
                email="Meera@MilkDelivery.com",
                password="secret1",
                full_name="Meera Joshi",
                phone="9876543210",
                role=UserRole.MANAGER,
            )
        )

        # Assert
        assert result.is_ok()
        assert result.value.access_token == "token-abc"
        assert result.value.user.email == "meera@milkdelivery.com"
        assert result.value.user.role == UserRole.MANAGER
        created = mock_user_repo.create.call_args[0][0]
        assert created.password_hash == "hashed:secret1"
        mock_uow.commit.assert_called_once()

    async def test_rejects_existing_user(self, mock_uow, mock_user_repo, mock_hasher, mock_tokens):
        mock_user_repo.exists_by_email_or_phone = AsyncMock(return_value=True)
        mock_user_repo.create = AsyncMock()
        use_case = RegisterUser(mock_uow, mock_user_repo, mock_hasher, mock_tokens)

        result = await use_case.execute(
            RegisterUserCommandDTO(
                email="meera@milkdelivery.com",
                password="secret1",
                full_name="Meera Joshi",
                phone="9876543210",
            )
        )

        assert result.is_err()
        assert result.error.code == "USER_EXISTS"
        mock_user_repo.create.assert_not_called()


@pytest.mark.asyncio
class TestLogin:
    """Test credential checks"""

    async def test_valid_credentials(self, mock_user_repo, mock_hasher, mock_tokens):
        mock_user_repo.get_by_email = AsyncMock(return_value=make_user())

        result = await Login(mock_user_repo, mock_hasher, mock_tokens).execute(
            LoginCommandDTO(email="meera@milkdelivery.com", password="secret1")
        )

        assert result.is_ok()
        assert result.value.token_type == "bearer"
        assert result.value.user.user_id == 7

    async def test_wrong_password_and_unknown_email_look_the_same(
        self, mock_user_repo, mock_hasher, mock_tokens
    ):
        use_case = Login(mock_user_repo, mock_hasher, mock_tokens)

        mock_user_repo.get_by_email = AsyncMock(return_value=make_user())
        wrong_password = await use_case.execute(
            LoginCommandDTO(email="meera@milkdelivery.com", password="nope")
        )
        mock_user_repo.get_by_email = AsyncMock(return_value=None)
        unknown_email = await use_case.execute(
            LoginCommandDTO(email="nobody@milkdelivery.com", password="secret1")
        )

        assert wrong_password.error.code == "INVALID_CREDENTIALS"
        assert unknown_email.error.code == "INVALID_CREDENTIALS"
        assert wrong_password.error.message == unknown_email.error.message
        mock_tokens.issue.assert_not_called()

    async def test_inactive_user_is_refused(self, mock_user_repo, mock_hasher, mock_tokens):
        mock_user_repo.get_by_email = AsyncMock(return_value=make_user(is_active=False))

        result = await Login(mock_user_repo, mock_hasher, mock_tokens).execute(
            LoginCommandDTO(email="meera@milkdelivery.com", password="secret1")
        )

        assert result.is_err()
        assert result.error.code == "USER_INACTIVE"


@pytest.mark.asyncio
class TestChangePassword:

    async def test_changes_hash(self, mock_uow, mock_user_repo, mock_hasher):
        user = make_user()
        mock_user_repo.get_by_id = AsyncMock(return_value=user)
        mock_user_repo.update = AsyncMock(return_value=user)

        result = await ChangePassword(mock_uow, mock_user_repo, mock_hasher).execute(
            7, ChangePasswordCommandDTO(current_password="secret1", new_password="secret2")
        )

        assert result.is_ok()
        assert user.password_hash == "hashed:secret2"
        mock_uow.commit.assert_called_once()

    async def test_wrong_current_password(self, mock_uow, mock_user_repo, mock_hasher):
        user = make_user()
        mock_user_repo.get_by_id = AsyncMock(return_value=user)
        mock_user_repo.update = AsyncMock()

        result = await ChangePassword(mock_uow, mock_user_repo, mock_hasher).execute(
            7, ChangePasswordCommandDTO(current_password="wrong", new_password="secret2")
        )

        assert result.is_err()
        assert result.error.code == "INVALID_CREDENTIALS"
        assert user.password_hash == "hashed:secret1"
        mock_user_repo.update.assert_not_called()


class TestAuthCommandValidation:

    def test_short_password_is_invalid(self):
        with pytest.raises(ValueError):
            RegisterUserCommandDTO(
                email="meera@milkdelivery.com",
                password="abc",
                full_name="Meera Joshi",
                phone="9876543210",
            )

    def test_email_is_lowercased(self):
        command = LoginCommandDTO(email="Meera@MilkDelivery.com", password="x")

        assert command.email == "meera@milkdelivery.com"


@pytest.mark.asyncio
class TestUpdateProfile:
    """Test self-service profile changes"""

    async def test_changes_name_and_phone(self, mock_uow, mock_user_repo):
        user = make_user()
        mock_user_repo.get_by_id = AsyncMock(return_value=user)
        mock_user_repo.update = AsyncMock(side_effect=lambda u: u)

        result = await UpdateProfile(mock_uow, mock_user_repo).execute(
            7, UpdateProfileCommandDTO(full_name="Meera Kulkarni", phone="9876500099")
        )

        assert result.is_ok()
        assert result.value.full_name == "Meera Kulkarni"
        assert result.value.phone == "9876500099"
        assert result.value.email == "meera@milkdelivery.com"
        mock_uow.commit.assert_called_once()

    async def test_phone_taken_by_another_account(self, mock_uow, mock_user_repo):
        mock_user_repo.get_by_id = AsyncMock(return_value=make_user())
        mock_user_repo.update = AsyncMock(
            side_effect=IntegrityError("UPDATE users ...", {}, Exception("UNIQUE constraint failed: users.phone"))
        )

        result = await UpdateProfile(mock_uow, mock_user_repo).execute(
            7, UpdateProfileCommandDTO(phone="9876500001")
        )

        assert result.is_err()
        assert result.error.code == "DUPLICATE_ENTRY"
        mock_uow.rollback.assert_called_once()

    async def test_unknown_user(self, mock_uow, mock_user_repo):
        mock_user_repo.get_by_id = AsyncMock(return_value=None)

        result = await UpdateProfile(mock_uow, mock_user_repo).execute(
            99, UpdateProfileCommandDTO(full_name="Nobody")
        )

        assert result.is_err()
        assert result.error.code == "USER_NOT_FOUND"


class TestSecurityServices:
    """bcrypt and JWT adapters"""

    def test_bcrypt_round_trip(self):
        hasher = BcryptPasswordHasher(rounds=4)

        hashed = hasher.hash("secret1")

        assert hashed != "secret1"
        assert hasher.verify("secret1", hashed)
        assert not hasher.verify("secret2", hashed)

    def test_bcrypt_rejects_malformed_hash(self):
        assert not BcryptPasswordHasher(rounds=4).verify("secret1", "not-a-hash")

    def test_token_carries_identity(self):
        tokens = JwtTokenService(secret="test-secret")

        claims = tokens.decode(tokens.issue(make_user(role=UserRole.ADMIN)))

        assert claims["sub"] == "7"
        assert claims["role"] == "admin"
        assert claims["email"] == "meera@milkdelivery.com"

    def test_expired_token(self):
        tokens = JwtTokenService(secret="test-secret", expires_minutes=-5)

        with pytest.raises(InvalidTokenError) as exc_info:
            tokens.decode(tokens.issue(make_user()))

        assert exc_info.value.expired

    def test_token_signed_with_other_secret(self):
        token = JwtTokenService(secret="other-secret").issue(make_user())

        with pytest.raises(InvalidTokenError) as exc_info:
            JwtTokenService(secret="test-secret").decode(token)

        assert not exc_info.value.expired
