"""
Verify Email Use Case

Consumes a pending email verification token.
"""

import logging

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.credentials import token_digest
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.libs.result import Error, Result, Return

from .dtos import StatusResponse

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must resolve to a verification record
    - Record must still be pending (verified records are history)
    - Record must not be expired (24 hours)
    - Record and User.email_verified flip in one transaction
    - Welcome email afterwards is best-effort
    """

    def __init__(self, uow: UnitOfWork, notifier: Notifier):
        self.uow = uow
        self.notifier = notifier

    async def execute(self, token: str) -> Result[StatusResponse]:
        """
        Errors:
            - TOKEN_INVALID: Token not found
            - ALREADY_VERIFIED: Token was already used
            - TOKEN_EXPIRED: Token has expired
        """
        async with self.uow:
            verification = await self.uow.email_verifications.get_by_token_hash(
                token_digest(token)
            )
            if verification is None:
                return Return.err(Error(ErrorCode.TOKEN_INVALID, "Invalid verification token"))

            if verification.verified:
                return Return.err(Error(ErrorCode.ALREADY_VERIFIED, "Email already verified"))

            now = utcnow()
            if now > verification.expires_at:
                return Return.err(Error(ErrorCode.TOKEN_EXPIRED, "Verification token expired"))

            user = await self.uow.users.get_by_id(verification.user_id)
            if user is None:
                return Return.err(Error(ErrorCode.TOKEN_INVALID, "Invalid verification token"))

            verification.verified = True
            verification.verified_at = now
            await self.uow.email_verifications.update(verification)

            user.email_verified = True
            await self.uow.users.update(user)

            await self.uow.commit()

        logger.info("Email verified for user: %s", user.id)

        if not await self.notifier.send_welcome_email(user.email, user.first_name or "User"):
            logger.warning("Welcome email for user %s was not delivered", user.id)

        return Return.ok(StatusResponse(status="verified", message="Email verified successfully"))
