"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import LoginMethod, MembershipRole

from .user import User
from .project import Project
from .project_membership import ProjectMembership
from .email_verification import EmailVerification
from .password_reset import PasswordReset
from .session import Session
from .project_invitation import ProjectInvitation
from .login_history import LoginHistory
from .bootstrap_claim import BootstrapClaim

__all__ = [
    # Enums
    "LoginMethod",
    "MembershipRole",
    # Entities
    "User",
    "Project",
    "ProjectMembership",
    "EmailVerification",
    "PasswordReset",
    "Session",
    "ProjectInvitation",
    "LoginHistory",
    "BootstrapClaim",
]
