"""
Operator commands for a fresh deployment.

Run: python -m tenantauth.scripts.bootstrap <command> [args]

    seed-project        create a demo project and print its credentials
    promote-admin EMAIL grant global admin to an existing user
    create-invitation EMAIL
                        issue an unbound project invitation as that admin
    verify-user EMAIL   mark a user's email as verified
"""

import argparse
import asyncio
import logging
import sys
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tenantauth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.credentials import ApiCredentials, generate_api_credentials, random_token
from tenantauth.app.services.invitation_ledger import INVITATION_TTL_DAYS
from tenantauth.app.services.unit_of_work import ConflictError, UnitOfWork
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import Project, ProjectInvitation, User
from tenantauth.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

DEMO_ORIGINS = ["http://localhost:3000", "http://localhost:3001"]


async def seed_project(
    uow: UnitOfWork,
    name: str = "Demo Project",
    slug: str = "demo-project",
    description: Optional[str] = "Demo project for testing authentication",
) -> Result[tuple[Project, ApiCredentials]]:
    """Create an active project. The returned credentials hold the only copy of the secret."""
    async with uow:
        if await uow.projects.get_by_slug(slug):
            return Return.err(Error(ErrorCode.SLUG_TAKEN, f"Project slug '{slug}' already taken"))

        credentials = generate_api_credentials()
        try:
            project = await uow.projects.create(
                Project(
                    name=name,
                    slug=slug,
                    description=description,
                    api_key=credentials.api_key,
                    api_secret_hash=credentials.api_secret_hash,
                    allowed_origins=DEMO_ORIGINS,
                )
            )
            await uow.commit()
        except ConflictError:
            return Return.err(Error(ErrorCode.SLUG_TAKEN, f"Project slug '{slug}' already taken"))

    logger.info("Seeded project %s (%s)", project.id, project.slug)
    return Return.ok((project, credentials))


async def promote_admin(uow: UnitOfWork, email: str) -> Result[User]:
    async with uow:
        user = await uow.users.get_by_email(email)
        if user is None:
            return Return.err(Error(ErrorCode.USER_NOT_FOUND, f"No user with email {email}"))

        user.is_global_admin = True
        await uow.users.update(user)
        await uow.commit()

    logger.info("User %s promoted to global admin", user.id)
    return Return.ok(user)


async def verify_user(uow: UnitOfWork, email: str) -> Result[User]:
    async with uow:
        user = await uow.users.get_by_email(email)
        if user is None:
            return Return.err(Error(ErrorCode.USER_NOT_FOUND, f"No user with email {email}"))

        user.email_verified = True
        await uow.users.update(user)
        await uow.commit()

    logger.info("User %s marked as verified", user.id)
    return Return.ok(user)


async def create_invitation(uow: UnitOfWork, admin_email: str) -> Result[ProjectInvitation]:
    """Invitation not bound to any email; whoever holds the key may redeem it."""
    async with uow:
        admin = await uow.users.get_by_email(admin_email)
        if admin is None or not admin.is_global_admin:
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "User is not found or not a global admin")
            )

        invitation = await uow.invitations.create(
            ProjectInvitation(
                key=random_token(),
                description="Generated via CLI script",
                created_by_id=admin.id,
                expires_at=utcnow() + timedelta(days=INVITATION_TTL_DAYS),
            )
        )
        await uow.commit()

    logger.info("Invitation %s created by %s", invitation.id, admin.id)
    return Return.ok(invitation)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tenantauth-bootstrap")
    commands = parser.add_subparsers(dest="command", required=True)

    seed = commands.add_parser("seed-project", help="Create a demo project")
    seed.add_argument("--name", default="Demo Project")
    seed.add_argument("--slug", default="demo-project")

    for name, help_text in (
        ("promote-admin", "Grant global admin"),
        ("create-invitation", "Issue a project invitation as this admin"),
        ("verify-user", "Mark email as verified"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("email", type=str.lower)

    return parser


async def run(args: argparse.Namespace) -> int:
    engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with session_factory() as session:
            uow = SqlAlchemyUnitOfWork(session)

            if args.command == "seed-project":
                result = await seed_project(uow, name=args.name, slug=args.slug)
                if result.is_ok():
                    project, credentials = result.value
                    print(f"Project created: {project.name} ({project.slug})")
                    print(f"API Key:    {credentials.api_key}")
                    print(f"API Secret: {credentials.api_secret}")
                    print("Save these credentials - the secret won't be shown again!")
            elif args.command == "promote-admin":
                result = await promote_admin(uow, args.email)
                if result.is_ok():
                    print(f"Promoted to global admin: {result.value.email}")
            elif args.command == "verify-user":
                result = await verify_user(uow, args.email)
                if result.is_ok():
                    print(f"Verified: {result.value.email}")
            else:
                result = await create_invitation(uow, args.email)
                if result.is_ok():
                    print(f"Key: {result.value.key}")
                    print(f"Expires At: {result.value.expires_at}")
                    print("Use this key to create a new project via POST /projects")
    finally:
        await engine.dispose()

    if result.is_err():
        print(f"{result.error.code}: {result.error.message}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
