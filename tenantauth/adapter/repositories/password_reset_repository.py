from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from tenantauth.adapter.repositories.base import SqlModelRepository
from tenantauth.app.repositories.password_reset_repository import IPasswordResetRepository
from tenantauth.domain.entities import PasswordReset


class PasswordResetRepository(SqlModelRepository, IPasswordResetRepository):
    """PasswordReset repository implementation using SQLModel"""

    async def create(self, reset: PasswordReset) -> PasswordReset:
        return await self._save(reset)

    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordReset]:
        stmt = select(PasswordReset).where(PasswordReset.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_used(self, reset_id: UUID, used_at: datetime) -> bool:
        """Conditional update; the row count decides the winner of a race"""
        stmt = (
            update(PasswordReset)
            .where(PasswordReset.id == reset_id, PasswordReset.used == False)  # noqa: E712
            .values(used=True, used_at=used_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
