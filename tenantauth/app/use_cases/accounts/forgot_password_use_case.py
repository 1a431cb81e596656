"""
Forgot Password Use Case

Issues a password reset token without revealing whether the account exists.
"""

import logging
from datetime import timedelta
from typing import Optional

from tenantauth.app.services.credentials import random_token, token_digest
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.tenant_registry import resolve_active_project
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import PasswordReset
from tenantauth.libs.result import Result, Return

from .dtos import StatusResponse

logger = logging.getLogger(__name__)

RESET_TTL = timedelta(hours=1)

# Identical for every outcome
SENT = StatusResponse(
    status="sent", message="If the account exists, a password reset email has been sent"
)


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Unknown project, unknown email and missing membership all return the
      same success response and create no token
    - Token is 32 random bytes, stored as a SHA-256 digest
    - Token expires in 1 hour
    - Requester IP is stored on the token
    """

    def __init__(self, uow: UnitOfWork, notifier: Notifier):
        self.uow = uow
        self.notifier = notifier

    async def execute(
        self, email: str, project_api_key: str, ip_address: Optional[str] = None
    ) -> Result[StatusResponse]:
        async with self.uow:
            project_result = await resolve_active_project(self.uow, project_api_key)
            if project_result.is_err():
                logger.warning("Password reset requested with unusable project key")
                return Return.ok(SENT)
            project = project_result.value

            user = await self.uow.users.get_by_email(email)
            membership = None
            if user is not None:
                membership = await self.uow.memberships.get_by_user_and_project(
                    user.id, project.id
                )

            if membership is None:
                logger.warning(
                    "Password reset requested for unknown account in project %s", project.id
                )
                return Return.ok(SENT)

            token = random_token()
            await self.uow.password_resets.create(
                PasswordReset(
                    user_id=user.id,
                    token_hash=token_digest(token),
                    expires_at=utcnow() + RESET_TTL,
                    ip_address=ip_address,
                )
            )

            await self.uow.commit()

        logger.info("Password reset issued for user: %s", user.id)

        if not await self.notifier.send_password_reset_email(user.email, token):
            logger.warning("Password reset email for user %s was not delivered", user.id)

        return Return.ok(SENT)
