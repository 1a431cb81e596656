from typing import Optional
from uuid import UUID

from sqlmodel import select

from tenantauth.adapter.repositories.base import SqlModelRepository
from tenantauth.app.repositories.project_repository import IProjectRepository
from tenantauth.domain.entities import Project


class ProjectRepository(SqlModelRepository, IProjectRepository):
    """Project repository implementation using SQLModel"""

    async def get_by_id(self, project_id: UUID) -> Optional[Project]:
        stmt = select(Project).where(Project.id == project_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_api_key(self, api_key: str) -> Optional[Project]:
        stmt = select(Project).where(Project.api_key == api_key)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Project]:
        stmt = select(Project).where(Project.slug == slug)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, project: Project) -> Project:
        return await self._save(project)
