"""
Register Use Case

Creates a user inside a project, or bootstraps the first global admin.
"""

import logging
from datetime import timedelta
from typing import Optional

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.credentials import (
    HashingError,
    hash_password,
    random_token,
    token_digest,
)
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.tenant_registry import resolve_active_project
from tenantauth.app.services.unit_of_work import ConflictError, UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import (
    BootstrapClaim,
    EmailVerification,
    MembershipRole,
    ProjectMembership,
    User,
)
from tenantauth.libs.result import Error, Result, Return

from .dtos import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)

VERIFICATION_TTL = timedelta(hours=24)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Bootstrap mode: invitation_key equals the configured bootstrap key
       and no user exists yet -> global admin, email pre-verified, no project.
       A BootstrapClaim row makes the store admit a single winner
    2. Otherwise the project API key must resolve to an active project
    3. Email must not be registered under any project
    4. Create User (email_verified=False) + ProjectMembership(role=user)
    5. Create pending EmailVerification (24h)
    6. Commit, then send the verification email (failure is only logged)
    """

    def __init__(
        self, uow: UnitOfWork, notifier: Notifier, bootstrap_key: Optional[str] = None
    ):
        self.uow = uow
        self.notifier = notifier
        self.bootstrap_key = bootstrap_key

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        if self._presents_bootstrap_key(command):
            bootstrapped = await self._bootstrap_global_admin(command)
            if bootstrapped is not None:
                return bootstrapped

        async with self.uow:
            project_result = await resolve_active_project(self.uow, command.project_api_key)
            if project_result.is_err():
                return Return.err(project_result.error)
            project = project_result.value

            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error(ErrorCode.DUPLICATE_EMAIL, "User with this email already exists")
                )

            try:
                password_hash = hash_password(command.password)
            except HashingError as exc:
                return Return.err(Error(ErrorCode.HASHING_ERROR, str(exc)))

            token = random_token()
            try:
                user = await self.uow.users.create(
                    User(
                        email=command.email,
                        password_hash=password_hash,
                        first_name=command.first_name,
                        last_name=command.last_name,
                        email_verified=False,
                    )
                )
                await self.uow.memberships.create(
                    ProjectMembership(
                        user_id=user.id, project_id=project.id, role=MembershipRole.user
                    )
                )
                await self.uow.email_verifications.create(
                    EmailVerification(
                        user_id=user.id,
                        email=user.email,
                        token_hash=token_digest(token),
                        expires_at=utcnow() + VERIFICATION_TTL,
                    )
                )
                await self.uow.commit()
            except ConflictError:
                # Lost a race against a concurrent registration of the same email
                return Return.err(
                    Error(ErrorCode.DUPLICATE_EMAIL, "User with this email already exists")
                )

        logger.info("User registered: %s (ID: %s, project: %s)", user.email, user.id, project.id)

        sent = await self.notifier.send_verification_email(user.email, token)
        if not sent:
            logger.warning("Verification email for new user %s was not delivered", user.id)

        return Return.ok(RegisterResponse(user_id=str(user.id), email=user.email))

    def _presents_bootstrap_key(self, command: RegisterCommand) -> bool:
        return bool(self.bootstrap_key) and command.invitation_key == self.bootstrap_key

    async def _bootstrap_global_admin(
        self, command: RegisterCommand
    ) -> Optional[Result[RegisterResponse]]:
        """Returns None when bootstrap is closed; the request then registers normally."""
        async with self.uow:
            # Open only while the user table is empty
            if await self.uow.users.count() != 0:
                return None

            try:
                password_hash = hash_password(command.password)
            except HashingError as exc:
                return Return.err(Error(ErrorCode.HASHING_ERROR, str(exc)))

            try:
                await self.uow.users.claim_bootstrap(BootstrapClaim(email=command.email))
            except ConflictError:
                logger.warning("Bootstrap already claimed, %s registers normally", command.email)
                return None

            try:
                user = await self.uow.users.create(
                    User(
                        email=command.email,
                        password_hash=password_hash,
                        first_name=command.first_name,
                        last_name=command.last_name,
                        email_verified=True,
                        is_active=True,
                        is_global_admin=True,
                    )
                )
                await self.uow.commit()
            except ConflictError:
                return Return.err(
                    Error(ErrorCode.DUPLICATE_EMAIL, "User with this email already exists")
                )

        logger.warning("Global admin bootstrapped: %s (ID: %s)", user.email, user.id)
        return Return.ok(RegisterResponse(user_id=str(user.id), email=user.email))
