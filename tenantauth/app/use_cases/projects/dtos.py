"""
Project Provisioning DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class CreateInvitationCommand(BaseModel):
    email: str
    description: Optional[str] = None


class CreateProjectCommand(BaseModel):
    """
    Create project command - redeems an invitation

    The email/password pair becomes the project's first admin. An existing
    account is attached as-is and keeps its password.
    """

    invitation_key: str
    project_name: str
    project_slug: str
    project_description: Optional[str] = None
    email: str
    password: str
    first_name: str
    last_name: str


# ============================================================================
# Response DTOs
# ============================================================================


class InvitationResponse(BaseModel):
    key: str
    email: Optional[str] = None
    description: Optional[str] = None
    expires_at: datetime
    invitation_url: str


class ProjectCreated(BaseModel):
    """Project info - api_secret is only ever returned here"""

    id: str
    name: str
    slug: str
    api_key: str
    api_secret: str


class ProjectAdmin(BaseModel):
    id: str
    email: str


class CreateProjectResponse(BaseModel):
    project: ProjectCreated
    user: ProjectAdmin
    is_new_user: bool
