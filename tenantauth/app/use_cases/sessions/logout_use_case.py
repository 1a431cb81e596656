"""
Logout Use Case

Ends one session, or every session of a user.
"""

import logging
from uuid import UUID

from tenantauth.app.services.credentials import token_digest
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.libs.result import Result, Return

from .dtos import LogoutAllResponse, LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Logout deletes the session keyed by the refresh token digest;
      an unknown token is still a successful logout
    - Logout-all deletes every session of the user and reports the count
    - Access tokens already issued stay valid until they expire
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def logout(self, refresh_token: str) -> Result[LogoutResponse]:
        async with self.uow:
            deleted = await self.uow.sessions.delete_by_refresh_token_hash(
                token_digest(refresh_token)
            )
            await self.uow.commit()

        if not deleted:
            logger.debug("Logout with unknown refresh token")

        return Return.ok(LogoutResponse(status="success", message="Logged out successfully"))

    async def logout_all(self, user_id: UUID) -> Result[LogoutAllResponse]:
        async with self.uow:
            count = await self.uow.sessions.delete_all_by_user_id(user_id)
            await self.uow.commit()

        logger.info("Revoked %s session(s) for user %s", count, user_id)

        return Return.ok(LogoutAllResponse(status="success", sessions_revoked=count))
