from tenantauth.adapter.repositories.base import SqlModelRepository
from tenantauth.app.repositories.login_history_repository import ILoginHistoryRepository
from tenantauth.domain.entities import LoginHistory


class LoginHistoryRepository(SqlModelRepository, ILoginHistoryRepository):
    """LoginHistory repository implementation using SQLModel"""

    async def create(self, entry: LoginHistory) -> LoginHistory:
        return await self._save(entry)
