"""
Create Project Use Case

Redeems a project invitation and provisions the project together with
its first admin.
"""

import logging
from datetime import timedelta

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services import invitation_ledger
from tenantauth.app.services.credentials import (
    HashingError,
    generate_api_credentials,
    hash_password,
    random_token,
    token_digest,
)
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.unit_of_work import ConflictError, UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import (
    EmailVerification,
    MembershipRole,
    Project,
    ProjectMembership,
    User,
)
from tenantauth.libs.result import Error, Result, Return

from .dtos import CreateProjectCommand, CreateProjectResponse, ProjectAdmin, ProjectCreated

logger = logging.getLogger(__name__)

VERIFICATION_TTL = timedelta(hours=24)

PROVISION_ATTEMPTS = 2

SLUG_TAKEN = Error(ErrorCode.SLUG_TAKEN, "Project slug already taken")


class CreateProjectUseCase:
    """
    Use case for provisioning a project from an invitation.

    Business Logic:
    1. Invitation must be unused, unexpired and bound to this email
    2. Slug must be free
    3. In one transaction: invitation marked used, API credentials,
       Project, User (found or created), admin ProjectMembership
    4. The invitation flip is a conditional update and the first write;
       losing a concurrent redemption yields INVITATION_INVALID
    5. An email registered concurrently is retried once as an existing user
    6. After commit a new user gets an EmailVerification and a
       verification email; failures there are logged only

    Existing users are attached as admins and keep their password.
    """

    def __init__(self, uow: UnitOfWork, notifier: Notifier):
        self.uow = uow
        self.notifier = notifier

    async def execute(self, command: CreateProjectCommand) -> Result[CreateProjectResponse]:
        """
        Errors:
            - INVITATION_INVALID: unknown or already used key
            - INVITATION_EXPIRED: past the 3 day window
            - INVITATION_EMAIL_MISMATCH: key bound to another email
            - SLUG_TAKEN: slug already in use
        """
        password_hash = None

        for _ in range(PROVISION_ATTEMPTS):
            async with self.uow:
                now = utcnow()
                invitation = await self.uow.invitations.get_by_key(command.invitation_key)
                check = invitation_ledger.check_redeemable(invitation, command.email, now)
                if check.is_err():
                    return Return.err(check.error)

                if await self.uow.projects.get_by_slug(command.project_slug):
                    return Return.err(SLUG_TAKEN)

                user = await self.uow.users.get_by_email(command.email)
                is_new_user = user is None

                if is_new_user and password_hash is None:
                    try:
                        password_hash = hash_password(command.password)
                    except HashingError as exc:
                        return Return.err(Error(ErrorCode.HASHING_ERROR, str(exc)))

                # First write: a concurrent redemption of the same key stops here
                consumed = await invitation_ledger.consume(self.uow, invitation, now)
                if consumed.is_err():
                    return Return.err(consumed.error)

                credentials = generate_api_credentials()
                try:
                    project = await self.uow.projects.create(
                        Project(
                            name=command.project_name,
                            slug=command.project_slug,
                            description=command.project_description,
                            api_key=credentials.api_key,
                            api_secret_hash=credentials.api_secret_hash,
                        )
                    )
                except ConflictError:
                    return Return.err(SLUG_TAKEN)

                if is_new_user:
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
                    except ConflictError:
                        # Registered meanwhile; the next attempt attaches the stored user
                        logger.info("Email %s registered concurrently, retrying", command.email)
                        continue

                await self.uow.memberships.create(
                    ProjectMembership(
                        user_id=user.id, project_id=project.id, role=MembershipRole.admin
                    )
                )
                await self.uow.invitations.record_project(invitation.id, project.id)
                await self.uow.commit()
                break
        else:
            return Return.err(
                Error(ErrorCode.DUPLICATE_EMAIL, "User with this email already exists")
            )

        logger.info(
            "Project %s (%s) provisioned for user %s via invitation %s",
            project.id,
            project.slug,
            user.id,
            invitation.id,
        )

        if is_new_user:
            await self._send_verification(user)

        return Return.ok(
            CreateProjectResponse(
                project=ProjectCreated(
                    id=str(project.id),
                    name=project.name,
                    slug=project.slug,
                    api_key=project.api_key,
                    api_secret=credentials.api_secret,
                ),
                user=ProjectAdmin(id=str(user.id), email=user.email),
                is_new_user=is_new_user,
            )
        )

    async def _send_verification(self, user: User) -> None:
        # The project already exists; nothing here may fail the request
        try:
            token = random_token()
            async with self.uow:
                await self.uow.email_verifications.create(
                    EmailVerification(
                        user_id=user.id,
                        email=user.email,
                        token_hash=token_digest(token),
                        expires_at=utcnow() + VERIFICATION_TTL,
                    )
                )
                await self.uow.commit()

            if not await self.notifier.send_verification_email(user.email, token):
                logger.warning("Verification email for new admin %s was not delivered", user.id)
        except Exception:
            logger.exception("Failed to issue email verification for new admin %s", user.id)
