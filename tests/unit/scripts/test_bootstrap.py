import pytest

from tenantauth.app.services.credentials import token_digest
from tenantauth.scripts.bootstrap import (
    build_parser,
    create_invitation,
    promote_admin,
    seed_project,
    verify_user,
)


@pytest.mark.asyncio
async def test_seed_project_returns_secret_once(mock_uow):
    mock_uow.projects.get_by_slug.return_value = None

    result = await seed_project(mock_uow)

    project, credentials = result.value
    assert project.slug == "demo-project"
    assert project.is_active is True
    assert project.api_key == credentials.api_key
    assert project.api_secret_hash == token_digest(credentials.api_secret)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_seed_project_twice(mock_uow, project):
    mock_uow.projects.get_by_slug.return_value = project

    result = await seed_project(mock_uow, slug="acme")

    assert result.error.code == "SLUG_TAKEN"
    mock_uow.projects.create.assert_not_called()


@pytest.mark.asyncio
async def test_promote_admin(mock_uow, make_user):
    user = make_user()
    mock_uow.users.get_by_email.return_value = user

    result = await promote_admin(mock_uow, "user@acme.com")

    assert result.is_ok()
    assert user.is_global_admin is True
    mock_uow.users.update.assert_called_once_with(user)


@pytest.mark.asyncio
async def test_promote_unknown_user(mock_uow):
    mock_uow.users.get_by_email.return_value = None

    result = await promote_admin(mock_uow, "ghost@acme.com")

    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_verify_user(mock_uow, make_user):
    user = make_user(email_verified=False)
    mock_uow.users.get_by_email.return_value = user

    result = await verify_user(mock_uow, "user@acme.com")

    assert result.is_ok()
    assert user.email_verified is True


@pytest.mark.asyncio
async def test_cli_invitation_is_unbound(mock_uow, make_user):
    admin = make_user(is_global_admin=True)
    mock_uow.users.get_by_email.return_value = admin

    result = await create_invitation(mock_uow, admin.email)

    invitation = result.value
    assert invitation.email is None
    assert invitation.created_by_id == admin.id
    assert len(invitation.key) == 64


@pytest.mark.asyncio
async def test_cli_invitation_requires_global_admin(mock_uow, make_user):
    mock_uow.users.get_by_email.return_value = make_user(is_global_admin=False)

    result = await create_invitation(mock_uow, "user@acme.com")

    assert result.error.code == "FORBIDDEN"
    mock_uow.invitations.create.assert_not_called()


def test_parser_commands():
    parser = build_parser()

    assert parser.parse_args(["seed-project"]).slug == "demo-project"
    assert parser.parse_args(["promote-admin", "a@b.com"]).email == "a@b.com"
    assert parser.parse_args(["create-invitation", "a@b.com"]).command == "create-invitation"
