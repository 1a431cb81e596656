from abc import ABC, abstractmethod

from tenantauth.app.repositories.email_verification_repository import (
    IEmailVerificationRepository,
)
from tenantauth.app.repositories.invitation_repository import IInvitationRepository
from tenantauth.app.repositories.login_history_repository import ILoginHistoryRepository
from tenantauth.app.repositories.membership_repository import IMembershipRepository
from tenantauth.app.repositories.password_reset_repository import IPasswordResetRepository
from tenantauth.app.repositories.project_repository import IProjectRepository
from tenantauth.app.repositories.session_repository import ISessionRepository
from tenantauth.app.repositories.user_repository import IUserRepository


class ConflictError(Exception):
    """A write was rejected by a unique constraint (the losing writer of a race)."""


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    projects: IProjectRepository
    memberships: IMembershipRepository
    email_verifications: IEmailVerificationRepository
    password_resets: IPasswordResetRepository
    sessions: ISessionRepository
    invitations: IInvitationRepository
    login_history: ILoginHistoryRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
