from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantauth.app.services.unit_of_work import ConflictError


class SqlModelRepository:
    """Shared add/flush/refresh persistence for SQLModel repositories"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _save(self, entity: SQLModel) -> SQLModel:
        self.session.add(entity)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(str(exc.orig)) from exc
        await self.session.refresh(entity)
        return entity
