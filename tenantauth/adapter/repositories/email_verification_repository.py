from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from tenantauth.adapter.repositories.base import SqlModelRepository
from tenantauth.app.repositories.email_verification_repository import (
    IEmailVerificationRepository,
)
from tenantauth.domain.entities import EmailVerification


class EmailVerificationRepository(SqlModelRepository, IEmailVerificationRepository):
    """EmailVerification repository implementation using SQLModel"""

    async def get_by_token_hash(self, token_hash: str) -> Optional[EmailVerification]:
        stmt = select(EmailVerification).where(EmailVerification.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, verification: EmailVerification) -> EmailVerification:
        return await self._save(verification)

    async def update(self, verification: EmailVerification) -> EmailVerification:
        return await self._save(verification)

    async def delete_pending_by_user_id(self, user_id: UUID) -> int:
        """Verified records are history and are kept"""
        stmt = delete(EmailVerification).where(
            EmailVerification.user_id == user_id,
            EmailVerification.verified == False,  # noqa: E712
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
