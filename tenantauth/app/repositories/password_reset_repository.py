from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from tenantauth.domain.entities import PasswordReset


class IPasswordResetRepository(ABC):
    """PasswordReset repository interface - application layer"""

    @abstractmethod
    async def create(self, reset: PasswordReset) -> PasswordReset:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordReset]:
        """Get password reset token by token digest"""
        pass

    @abstractmethod
    async def mark_used(self, reset_id: UUID, used_at: datetime) -> bool:
        """
        Flip used False -> True.

        Returns False if the token was already used (a concurrent reset won).
        """
        pass
