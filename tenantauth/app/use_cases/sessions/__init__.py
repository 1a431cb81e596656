"""
Session Manager Use Cases

Login, token refresh and logout.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .dtos import (
    ClientContext,
    LoginCommand,
    LoginResponse,
    LogoutAllResponse,
    LogoutResponse,
    RefreshTokenResponse,
    UserProfile,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # DTOs
    "ClientContext",
    "LoginCommand",
    "LoginResponse",
    "RefreshTokenResponse",
    "LogoutResponse",
    "LogoutAllResponse",
    "UserProfile",
]
