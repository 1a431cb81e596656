"""
Refresh Token Use Case

Exchanges a refresh token for a new access token.
"""

import logging

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.credentials import token_digest
from tenantauth.app.services.token_codec import TokenCodec
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.libs.result import Error, Result, Return

from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Refresh token signature and expiry are checked first
    - A Session keyed by the token digest must exist (logout deletes it)
    - An expired Session is deleted and the refresh fails
    - The user must still exist and not be banned
    - Only a new access token is issued; the session's last_used_at moves
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        claims_result = self.token_codec.verify_refresh_token(refresh_token)
        if claims_result.is_err():
            return Return.err(claims_result.error)
        claims = claims_result.value

        async with self.uow:
            session = await self.uow.sessions.get_by_refresh_token_hash(
                token_digest(refresh_token)
            )
            if session is None or session.user_id != claims.user_id:
                return Return.err(Error(ErrorCode.TOKEN_INVALID, "Invalid refresh token"))

            now = utcnow()
            if now > session.expires_at:
                await self.uow.sessions.delete_by_id(session.id)
                await self.uow.commit()
                return Return.err(Error(ErrorCode.TOKEN_EXPIRED, "Session has expired"))

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None:
                return Return.err(Error(ErrorCode.TOKEN_INVALID, "Invalid refresh token"))

            if user.is_banned:
                return Return.err(Error(ErrorCode.ACCOUNT_BANNED, "Account is banned"))

            session.last_used_at = now
            await self.uow.sessions.update(session)
            await self.uow.commit()

        logger.debug("Access token refreshed for user %s", user.id)

        return Return.ok(
            RefreshTokenResponse(
                access_token=self.token_codec.issue_access_token(user.id, user.email),
                expires_in=self.token_codec.access_token_expires_in,
            )
        )
