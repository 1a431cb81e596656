"""
Resend Verification Email Use Case

Replaces a user's pending verification token with a fresh one.
"""

import logging
from datetime import timedelta

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.credentials import random_token, token_digest
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.tenant_registry import resolve_active_project
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import EmailVerification
from tenantauth.libs.result import Error, Result, Return

from .dtos import StatusResponse

logger = logging.getLogger(__name__)

VERIFICATION_TTL = timedelta(hours=24)


class ResendVerificationUseCase:
    """
    Use case for resending email verification.

    Business Rules:
    - Project API key must resolve to an active project
    - User must exist, be a member of that project and be unverified
    - Every pending record of the user is deleted before the new one is
      created, so at most one pending token exists
    - New token expires in 24 hours
    """

    def __init__(self, uow: UnitOfWork, notifier: Notifier):
        self.uow = uow
        self.notifier = notifier

    async def execute(self, email: str, project_api_key: str) -> Result[StatusResponse]:
        async with self.uow:
            project_result = await resolve_active_project(self.uow, project_api_key)
            if project_result.is_err():
                return Return.err(project_result.error)
            project = project_result.value

            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

            if user.email_verified:
                return Return.err(Error(ErrorCode.ALREADY_VERIFIED, "Email already verified"))

            membership = await self.uow.memberships.get_by_user_and_project(user.id, project.id)
            if membership is None:
                return Return.err(
                    Error(ErrorCode.USER_NOT_FOUND, "User not associated with this project")
                )

            await self.uow.email_verifications.delete_pending_by_user_id(user.id)

            token = random_token()
            await self.uow.email_verifications.create(
                EmailVerification(
                    user_id=user.id,
                    email=user.email,
                    token_hash=token_digest(token),
                    expires_at=utcnow() + VERIFICATION_TTL,
                )
            )

            await self.uow.commit()

        logger.info("Verification email re-issued for user: %s", user.id)

        if not await self.notifier.send_verification_email(user.email, token):
            logger.warning("Verification email for user %s was not delivered", user.id)

        return Return.ok(StatusResponse(status="sent", message="Verification email sent"))
