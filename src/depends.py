"""FastAPI dependencies

Database sessions come from the Database handle on app.state; auth
dependencies resolve the bearer token to the calling user.
"""

from dataclasses import dataclass
from typing import AsyncIterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error
from src.adapter.services.database import Database
from src.adapter.services.security import BcryptPasswordHasher, JwtTokenService
from src.api.error import ClientError
from src.app.services.security import InvalidTokenError, PasswordHasher, TokenService
from src.domain.user import UserRole

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated principal taken from the access token"""

    user_id: Optional[int]
    email: str
    role: UserRole


def get_config(request: Request):
    return request.app.state.config


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    async with database.session() as session:
        yield session


def get_password_hasher(config=Depends(get_config)) -> PasswordHasher:
    return BcryptPasswordHasher(rounds=config.BCRYPT_ROUNDS)


def get_token_service(config=Depends(get_config)) -> TokenService:
    return JwtTokenService(
        secret=config.JWT_SECRET,
        algorithm=config.JWT_ALGORITHM,
        expires_minutes=config.JWT_EXPIRES_MINUTES,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    config=Depends(get_config),
) -> CurrentUser:
    if config.AUTH_DISABLED:
        return CurrentUser(user_id=None, email=config.ADMIN_EMAIL, role=UserRole.ADMIN)

    if credentials is None:
        raise ClientError(Error(code="NOT_AUTHENTICATED", message="Authentication required"))

    try:
        claims = tokens.decode(credentials.credentials)
    except InvalidTokenError as e:
        code = "TOKEN_EXPIRED" if e.expired else "INVALID_TOKEN"
        raise ClientError(Error(code=code, message=str(e)))

    if not claims.get("is_active", False):
        raise ClientError(Error(code="USER_INACTIVE", message="User account is deactivated"))

    try:
        return CurrentUser(
            user_id=int(claims["sub"]),
            email=claims["email"],
            role=UserRole(claims["role"]),
        )
    except (KeyError, ValueError):
        raise ClientError(Error(code="INVALID_TOKEN", message="Malformed token claims"))


def require_roles(*roles: UserRole):
    """Dependency factory admitting only the given roles"""

    async def check_role(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise ClientError(
                Error(
                    code="FORBIDDEN",
                    message=f"Role {user.role.value} is not allowed to perform this action",
                )
            )
        return user

    return check_role
