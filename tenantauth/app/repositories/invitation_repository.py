from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from tenantauth.domain.entities import ProjectInvitation


class IInvitationRepository(ABC):
    """ProjectInvitation repository interface - application layer"""

    @abstractmethod
    async def get_by_key(self, key: str) -> Optional[ProjectInvitation]:
        """Get invitation by key"""
        pass

    @abstractmethod
    async def create(self, invitation: ProjectInvitation) -> ProjectInvitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def mark_used(self, invitation_id: UUID, used_at: datetime) -> bool:
        """
        Flip used False -> True.

        Returns False if the invitation was already used.
        """
        pass

    @abstractmethod
    async def record_project(self, invitation_id: UUID, project_id: UUID) -> None:
        """Link a used invitation to the project created with it"""
        pass
