"""
Project Provisioning Use Cases

Invitation creation and invitation redemption.
"""

from .create_invitation_use_case import CreateInvitationUseCase
from .create_project_use_case import CreateProjectUseCase
from .dtos import (
    CreateInvitationCommand,
    CreateProjectCommand,
    CreateProjectResponse,
    InvitationResponse,
    ProjectAdmin,
    ProjectCreated,
)

__all__ = [
    # Use Cases
    "CreateInvitationUseCase",
    "CreateProjectUseCase",
    # DTOs
    "CreateInvitationCommand",
    "CreateProjectCommand",
    "CreateProjectResponse",
    "InvitationResponse",
    "ProjectAdmin",
    "ProjectCreated",
]
