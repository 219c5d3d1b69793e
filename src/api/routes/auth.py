"""Authentication API Routes"""

from fastapi import APIRouter, Depends, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.security import PasswordHasher, TokenService
from src.app.use_cases.auth import (
    RegisterUser,
    Login,
    GetProfile,
    UpdateProfile,
    ChangePassword,
    RegisterUserCommandDTO,
    LoginCommandDTO,
    ChangePasswordCommandDTO,
    UpdateProfileCommandDTO,
    UserResponseDTO,
    AuthResponseDTO,
)
from src.adapter.repositories import SqlAlchemyUserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import (
    CurrentUser,
    get_current_user,
    get_password_hasher,
    get_session,
    get_token_service,
)
from src.api.error import ClientError
from libs.result import Error

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Email or phone already registered"}},
)
async def register(
    request: RegisterUserCommandDTO,
    session: AsyncSession = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a staff user and return an access token."""
    use_case = RegisterUser(
        SqlAlchemyUnitOfWork(session), SqlAlchemyUserRepository(session), hasher, tokens
    )
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/login",
    response_model=AuthResponseDTO,
    responses={
        401: {"description": "Invalid email or password"},
        403: {"description": "User account is deactivated"},
    },
)
async def login(
    request: LoginCommandDTO,
    session: AsyncSession = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    use_case = Login(SqlAlchemyUserRepository(session), hasher, tokens)
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/profile", response_model=UserResponseDTO)
async def profile(
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    if user.user_id is None:
        raise ClientError(
            Error(code="USER_NOT_FOUND", message="No user profile while authentication is disabled")
        )

    result = await GetProfile(SqlAlchemyUserRepository(session)).execute(user.user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch("/profile", response_model=UserResponseDTO)
async def update_profile(
    request: UpdateProfileCommandDTO,
    session: AsyncSession = Depends(get_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Change the caller's name or phone."""
    if user.user_id is None:
        raise ClientError(
            Error(code="USER_NOT_FOUND", message="No user profile while authentication is disabled")
        )

    use_case = UpdateProfile(SqlAlchemyUnitOfWork(session), SqlAlchemyUserRepository(session))
    result = await use_case.execute(user.user_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    request: ChangePasswordCommandDTO,
    session: AsyncSession = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    user: CurrentUser = Depends(get_current_user),
):
    if user.user_id is None:
        raise ClientError(
            Error(code="USER_NOT_FOUND", message="No user profile while authentication is disabled")
        )

    use_case = ChangePassword(SqlAlchemyUnitOfWork(session), SqlAlchemyUserRepository(session), hasher)
    result = await use_case.execute(user.user_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
