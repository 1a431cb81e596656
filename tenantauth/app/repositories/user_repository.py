from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from tenantauth.domain.entities import BootstrapClaim, User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all users"""
        pass

    @abstractmethod
    async def claim_bootstrap(self, claim: BootstrapClaim) -> BootstrapClaim:
        """
        Record the one-time global admin bootstrap.

        Raises ConflictError if it was already claimed.
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
