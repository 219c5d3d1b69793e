from .auth import RegisterUser, Login, GetProfile, UpdateProfile, ChangePassword
from .dtos import (
    RegisterUserCommandDTO,
    LoginCommandDTO,
    ChangePasswordCommandDTO,
    UpdateProfileCommandDTO,
    UserResponseDTO,
    AuthResponseDTO,
)

__all__ = [
    "RegisterUser",
    "Login",
    "GetProfile",
    "UpdateProfile",
    "ChangePassword",
    "RegisterUserCommandDTO",
    "LoginCommandDTO",
    "ChangePasswordCommandDTO",
    "UpdateProfileCommandDTO",
    "UserResponseDTO",
    "AuthResponseDTO",
]
