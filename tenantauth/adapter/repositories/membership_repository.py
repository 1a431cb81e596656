from typing import Optional
from uuid import UUID

from sqlmodel import select

from tenantauth.adapter.repositories.base import SqlModelRepository
from tenantauth.app.repositories.membership_repository import IMembershipRepository
from tenantauth.domain.entities import ProjectMembership


class MembershipRepository(SqlModelRepository, IMembershipRepository):
    """ProjectMembership repository implementation using SQLModel"""

    async def get_by_user_and_project(
        self, user_id: UUID, project_id: UUID
    ) -> Optional[ProjectMembership]:
        stmt = select(ProjectMembership).where(
            ProjectMembership.user_id == user_id,
            ProjectMembership.project_id == project_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, membership: ProjectMembership) -> ProjectMembership:
        return await self._save(membership)
