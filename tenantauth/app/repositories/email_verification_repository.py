from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from tenantauth.domain.entities import EmailVerification


class IEmailVerificationRepository(ABC):
    """EmailVerification repository interface - application layer"""

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[EmailVerification]:
        """Get verification record by token digest"""
        pass

    @abstractmethod
    async def create(self, verification: EmailVerification) -> EmailVerification:
        """Create a new verification record"""
        pass

    @abstractmethod
    async def update(self, verification: EmailVerification) -> EmailVerification:
        """Update existing verification record"""
        pass

    @abstractmethod
    async def delete_pending_by_user_id(self, user_id: UUID) -> int:
        """Delete all unverified records for a user. Returns count deleted."""
        pass
