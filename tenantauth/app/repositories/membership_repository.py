from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from tenantauth.domain.entities import ProjectMembership


class IMembershipRepository(ABC):
    """ProjectMembership repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_project(
        self, user_id: UUID, project_id: UUID
    ) -> Optional[ProjectMembership]:
        """Get membership by user and project"""
        pass

    @abstractmethod
    async def create(self, membership: ProjectMembership) -> ProjectMembership:
        """Create a new membership"""
        pass
