from abc import ABC, abstractmethod

from tenantauth.domain.entities import LoginHistory


class ILoginHistoryRepository(ABC):
    """LoginHistory repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: LoginHistory) -> LoginHistory:
        """Append a login attempt (immutable)"""
        pass
