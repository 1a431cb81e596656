"""
Change Password Use Case

Authenticated password change. Existing sessions stay valid.
"""

import logging
from uuid import UUID

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.credentials import HashingError, hash_password, verify_password
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.libs.result import Error, Result, Return

from .dtos import StatusResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> Result[StatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or not user.password_hash:
                return Return.err(Error(ErrorCode.USER_NOT_FOUND, "User not found"))

            try:
                if not verify_password(current_password, user.password_hash):
                    return Return.err(
                        Error(
                            ErrorCode.CURRENT_PASSWORD_INCORRECT,
                            "Current password is incorrect",
                        )
                    )
                user.password_hash = hash_password(new_password)
            except HashingError as exc:
                return Return.err(Error(ErrorCode.HASHING_ERROR, str(exc)))

            await self.uow.users.update(user)
            await self.uow.commit()

        logger.info("Password changed for user: %s", user.id)

        return Return.ok(StatusResponse(status="success", message="Password changed successfully"))
