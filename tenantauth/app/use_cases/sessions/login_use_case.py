"""
Login Use Case

Authenticates a user against a project and opens a session.
"""

import logging
from datetime import timedelta
from typing import Optional

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.credentials import (
    HashingError,
    burn_password_check,
    token_digest,
    verify_password,
)
from tenantauth.app.services.tenant_registry import resolve_active_project
from tenantauth.app.services.token_codec import TokenCodec
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import LoginHistory, LoginMethod, Project, Session, User
from tenantauth.libs.result import Error, Result, Return

from .dtos import ClientContext, LoginCommand, LoginResponse, UserProfile

logger = logging.getLogger(__name__)

SESSION_TTL = timedelta(days=7)

INVALID_CREDENTIALS = Error(ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")


class LoginUseCase:
    """
    Use case for password login and token issuance.

    Checks run in this order and the first failure wins:
    1. Project API key resolves to an active project
    2. User exists and is a member of the project (or a global admin)
    3. User has a password and it matches
    4. User is not banned
    5. Email is verified

    Failures from step 3 on are written to LoginHistory. A successful login
    issues an access/refresh pair, stores a Session (7 days) keyed by the
    refresh token digest, updates last-login fields and records a
    successful LoginHistory row.
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(
        self, command: LoginCommand, client: Optional[ClientContext] = None
    ) -> Result[LoginResponse]:
        client = client or ClientContext()

        async with self.uow:
            project_result = await resolve_active_project(self.uow, command.project_api_key)
            if project_result.is_err():
                return Return.err(project_result.error)
            project = project_result.value

            user = await self._find_member(command.email, project)
            if user is None:
                # Same work as a real check so timing does not reveal membership
                burn_password_check()
                return Return.err(INVALID_CREDENTIALS)

            try:
                error = self._check_password(user, command.password) or self._check_standing(user)
            except HashingError as exc:
                return Return.err(Error(ErrorCode.HASHING_ERROR, str(exc)))

            if error is not None:
                await self._record_attempt(user, client, failure_reason=error.code)
                await self.uow.commit()
                logger.warning("Login rejected for user %s: %s", user.id, error.code)
                return Return.err(error)

            access_token = self.token_codec.issue_access_token(user.id, user.email)
            refresh_token = self.token_codec.issue_refresh_token(user.id)

            now = utcnow()
            await self.uow.sessions.create(
                Session(
                    user_id=user.id,
                    refresh_token_hash=token_digest(refresh_token),
                    ip_address=client.ip_address,
                    device_info={"user_agent": client.user_agent},
                    expires_at=now + SESSION_TTL,
                    last_used_at=now,
                )
            )

            user.last_login_at = now
            user.last_login_ip = client.ip_address
            await self.uow.users.update(user)

            await self._record_attempt(user, client)
            await self.uow.commit()

        logger.info("User %s logged in to project %s", user.id, project.id)

        return Return.ok(
            LoginResponse(
                user=UserProfile(
                    id=str(user.id),
                    email=user.email,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    email_verified=user.email_verified,
                    is_global_admin=user.is_global_admin,
                ),
                access_token=access_token,
                refresh_token=refresh_token,
                expires_in=self.token_codec.access_token_expires_in,
            )
        )

    async def _find_member(self, email: str, project: Project) -> Optional[User]:
        user = await self.uow.users.get_by_email(email)
        if user is None:
            return None
        if user.is_global_admin:
            return user
        membership = await self.uow.memberships.get_by_user_and_project(user.id, project.id)
        return user if membership else None

    @staticmethod
    def _check_password(user: User, password: str) -> Optional[Error]:
        if not user.password_hash:
            burn_password_check()
            return INVALID_CREDENTIALS
        if not verify_password(password, user.password_hash):
            return INVALID_CREDENTIALS
        return None

    @staticmethod
    def _check_standing(user: User) -> Optional[Error]:
        if user.is_banned:
            reason = user.ban_reason or "No reason given"
            return Error(ErrorCode.ACCOUNT_BANNED, f"Account is banned: {reason}")
        if not user.email_verified:
            return Error(ErrorCode.EMAIL_NOT_VERIFIED, "Please verify your email before logging in")
        return None

    async def _record_attempt(
        self, user: User, client: ClientContext, failure_reason: Optional[str] = None
    ) -> None:
        await self.uow.login_history.create(
            LoginHistory(
                user_id=user.id,
                method=LoginMethod.password,
                success=failure_reason is None,
                failure_reason=failure_reason,
                ip_address=client.ip_address,
                user_agent=client.user_agent,
            )
        )
