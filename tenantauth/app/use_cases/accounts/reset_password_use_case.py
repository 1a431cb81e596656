"""
Reset Password Use Case

Consumes a password reset token, sets the new password and signs the
user out everywhere.
"""

import logging

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.credentials import HashingError, hash_password, token_digest
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.libs.result import Error, Result, Return

from .dtos import StatusResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - Token must exist, be unused and be unexpired (1 hour window)
    - In one transaction: new password hash stored, token marked used,
      every session of the user deleted
    - The used flag is flipped by a conditional update so two concurrent
      resets with one token cannot both succeed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, new_password: str) -> Result[StatusResponse]:
        """
        Errors:
            - TOKEN_INVALID: Token not found
            - TOKEN_USED: Token has already been used
            - TOKEN_EXPIRED: Token has expired
        """
        async with self.uow:
            reset = await self.uow.password_resets.get_by_token_hash(token_digest(token))
            if reset is None:
                return Return.err(Error(ErrorCode.TOKEN_INVALID, "Invalid reset token"))

            if reset.used:
                return Return.err(Error(ErrorCode.TOKEN_USED, "Reset token already used"))

            now = utcnow()
            if now > reset.expires_at:
                return Return.err(Error(ErrorCode.TOKEN_EXPIRED, "Reset token expired"))

            user = await self.uow.users.get_by_id(reset.user_id)
            if user is None:
                return Return.err(Error(ErrorCode.TOKEN_INVALID, "Invalid reset token"))

            try:
                user.password_hash = hash_password(new_password)
            except HashingError as exc:
                return Return.err(Error(ErrorCode.HASHING_ERROR, str(exc)))

            if not await self.uow.password_resets.mark_used(reset.id, now):
                return Return.err(Error(ErrorCode.TOKEN_USED, "Reset token already used"))

            await self.uow.users.update(user)
            revoked = await self.uow.sessions.delete_all_by_user_id(user.id)

            await self.uow.commit()

        logger.info("Password reset completed for user %s, %s session(s) revoked", user.id, revoked)

        return Return.ok(StatusResponse(status="success", message="Password reset successful"))
