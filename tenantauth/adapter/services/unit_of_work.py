from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantauth.adapter.repositories.email_verification_repository import (
    EmailVerificationRepository,
)
from tenantauth.adapter.repositories.invitation_repository import InvitationRepository
from tenantauth.adapter.repositories.login_history_repository import LoginHistoryRepository
from tenantauth.adapter.repositories.membership_repository import MembershipRepository
from tenantauth.adapter.repositories.password_reset_repository import PasswordResetRepository
from tenantauth.adapter.repositories.project_repository import ProjectRepository
from tenantauth.adapter.repositories.session_repository import SessionRepository
from tenantauth.adapter.repositories.user_repository import UserRepository
from tenantauth.app.services.unit_of_work import ConflictError, UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.projects = ProjectRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.email_verifications = EmailVerificationRepository(self.session)
        self.password_resets = PasswordResetRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.login_history = LoginHistoryRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed inside the block is discarded
        await self.rollback()

    async def commit(self):
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(str(exc.orig)) from exc

    async def rollback(self):
        await self.session.rollback()
