"""
Account Lifecycle DTOs (Data Transfer Objects)

Command and Response classes for registration, verification and
password management.
"""

from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - validated registration intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    first_name: str
    last_name: str
    project_api_key: Optional[str] = None
    invitation_key: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for registration - never carries hashes or tokens"""

    user_id: str
    email: str


class StatusResponse(BaseModel):
    """Generic status/message response"""

    status: str
    message: str
