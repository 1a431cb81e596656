from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from tenantauth.adapter.repositories.base import SqlModelRepository
from tenantauth.app.repositories.session_repository import ISessionRepository
from tenantauth.domain.entities import Session


class SessionRepository(SqlModelRepository, ISessionRepository):
    """Session repository implementation using SQLModel"""

    async def get_by_refresh_token_hash(self, token_hash: str) -> Optional[Session]:
        """
        Expired sessions are returned too, the use case decides how to
        reject them.
        """
        stmt = select(Session).where(Session.refresh_token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, session_obj: Session) -> Session:
        return await self._save(session_obj)

    async def update(self, session_obj: Session) -> Session:
        return await self._save(session_obj)

    async def delete_by_refresh_token_hash(self, token_hash: str) -> bool:
        stmt = delete(Session).where(Session.refresh_token_hash == token_hash)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_id(self, session_id: UUID) -> bool:
        stmt = delete(Session).where(Session.id == session_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        stmt = delete(Session).where(Session.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
