from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from tenantauth.adapter.repositories.base import SqlModelRepository
from tenantauth.app.repositories.user_repository import IUserRepository
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import BootstrapClaim, User


class UserRepository(SqlModelRepository, IUserRepository):
    """User repository implementation using SQLModel"""

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def count(self) -> int:
        result = await self.session.exec(select(func.count()).select_from(User))
        return result.one()

    async def claim_bootstrap(self, claim: BootstrapClaim) -> BootstrapClaim:
        return await self._save(claim)

    async def create(self, user: User) -> User:
        return await self._save(user)

    async def update(self, user: User) -> User:
        user.updated_at = utcnow()
        return await self._save(user)
