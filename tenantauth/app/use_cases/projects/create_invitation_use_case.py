"""
Create Invitation Use Case

Global admins hand out single-use keys that allow creating one project.
"""

import logging
from datetime import timedelta
from uuid import UUID

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.credentials import random_token
from tenantauth.app.services.invitation_ledger import INVITATION_TTL_DAYS
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import ProjectInvitation
from tenantauth.libs.result import Error, Result, Return

from .dtos import CreateInvitationCommand, InvitationResponse

logger = logging.getLogger(__name__)


class CreateInvitationUseCase:
    """
    Use case for creating a project invitation.

    Business Rules:
    - Only global admins may create invitations
    - Key is 32 random bytes hex encoded
    - Invitation expires in 3 days
    - Invitation is bound to the target email
    - Notification is sent after commit and never fails the request
    """

    def __init__(self, uow: UnitOfWork, notifier: Notifier, frontend_url: str):
        self.uow = uow
        self.notifier = notifier
        self.frontend_url = frontend_url.rstrip("/")

    async def execute(
        self, requesting_user_id: UUID, command: CreateInvitationCommand
    ) -> Result[InvitationResponse]:
        """
        Errors:
            - FORBIDDEN: requester missing or not a global admin
        """
        async with self.uow:
            requester = await self.uow.users.get_by_id(requesting_user_id)
            if requester is None or not requester.is_global_admin:
                return Return.err(
                    Error(ErrorCode.FORBIDDEN, "Only global admins can create invitations")
                )

            invitation = await self.uow.invitations.create(
                ProjectInvitation(
                    key=random_token(),
                    email=command.email,
                    description=command.description,
                    created_by_id=requester.id,
                    expires_at=utcnow() + timedelta(days=INVITATION_TTL_DAYS),
                )
            )
            await self.uow.commit()

        logger.info("Project invitation %s created by %s", invitation.id, requester.id)

        sent = await self.notifier.send_project_invitation_email(
            invitation.email, invitation.key, invitation.expires_at
        )
        if not sent:
            logger.warning("Invitation email for %s was not delivered", invitation.id)

        return Return.ok(
            InvitationResponse(
                key=invitation.key,
                email=invitation.email,
                description=invitation.description,
                expires_at=invitation.expires_at,
                invitation_url=f"{self.frontend_url}/projects/new?key={invitation.key}",
            )
        )
