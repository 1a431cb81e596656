"""
Session Manager DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class ClientContext(BaseModel):
    """Where a request came from - recorded on sessions and login history"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class LoginCommand(BaseModel):
    email: str
    password: str
    project_api_key: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserProfile(BaseModel):
    """Public user profile returned with a token pair"""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_verified: bool
    is_global_admin: bool


class LoginResponse(BaseModel):
    """Response for login use case"""

    user: UserProfile
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class RefreshTokenResponse(BaseModel):
    """Response for refresh use case - the refresh token itself is not rotated"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class LogoutResponse(BaseModel):
    status: str
    message: str


class LogoutAllResponse(BaseModel):
    status: str
    sessions_revoked: int
