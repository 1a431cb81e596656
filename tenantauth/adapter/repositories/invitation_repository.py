from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from tenantauth.adapter.repositories.base import SqlModelRepository
from tenantauth.app.repositories.invitation_repository import IInvitationRepository
from tenantauth.domain.entities import ProjectInvitation


class InvitationRepository(SqlModelRepository, IInvitationRepository):
    """ProjectInvitation repository implementation using SQLModel"""

    async def get_by_key(self, key: str) -> Optional[ProjectInvitation]:
        stmt = select(ProjectInvitation).where(ProjectInvitation.key == key)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, invitation: ProjectInvitation) -> ProjectInvitation:
        return await self._save(invitation)

    async def mark_used(self, invitation_id: UUID, used_at: datetime) -> bool:
        """
        Conditional update on used=False.

        Two transactions redeeming the same key both pass the read-side
        check; only one of them can flip the flag.
        """
        stmt = (
            update(ProjectInvitation)
            .where(
                ProjectInvitation.id == invitation_id,
                ProjectInvitation.used == False,  # noqa: E712
            )
            .values(used=True, used_at=used_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def record_project(self, invitation_id: UUID, project_id: UUID) -> None:
        stmt = (
            update(ProjectInvitation)
            .where(ProjectInvitation.id == invitation_id)
            .values(used_by_project_id=project_id)
        )
        await self.session.execute(stmt)
        await self.session.flush()
