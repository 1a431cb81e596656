from datetime import timedelta
from uuid import uuid4

import pytest

from tenantauth.app.services.credentials import token_digest, verify_password
from tenantauth.app.services.unit_of_work import ConflictError
from tenantauth.app.use_cases.projects import CreateProjectCommand, CreateProjectUseCase
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import MembershipRole, ProjectInvitation


def make_command(**overrides) -> CreateProjectCommand:
    fields = dict(
        invitation_key="k" * 64,
        project_name="NewCo",
        project_slug="newco",
        email="owner@newco.com",
        password="SecurePass123!",
        first_name="Olive",
        last_name="Owner",
    )
    fields.update(overrides)
    return CreateProjectCommand(**fields)


@pytest.fixture
def invitation(mock_uow):
    invitation = ProjectInvitation(
        id=uuid4(),
        key="k" * 64,
        email="owner@newco.com",
        used=False,
        expires_at=utcnow() + timedelta(days=3),
    )
    mock_uow.invitations.get_by_key.return_value = invitation
    mock_uow.invitations.mark_used.return_value = True
    mock_uow.projects.get_by_slug.return_value = None
    mock_uow.users.get_by_email.return_value = None
    return invitation


@pytest.mark.asyncio
async def test_provision_with_new_user(mock_uow, mock_notifier, invitation):
    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(make_command())

    assert result.is_ok()
    data = result.value
    assert data.is_new_user is True
    assert data.project.slug == "newco"
    assert data.project.api_key.startswith("pk_")
    assert data.project.api_secret.startswith("sk_")

    project = mock_uow.projects.create.call_args.args[0]
    assert project.api_secret_hash == token_digest(data.project.api_secret)

    user = mock_uow.users.create.call_args.args[0]
    assert user.email_verified is False
    assert verify_password("SecurePass123!", user.password_hash)

    membership = mock_uow.memberships.create.call_args.args[0]
    assert membership.role == MembershipRole.admin
    assert membership.project_id == project.id
    assert membership.user_id == user.id

    assert mock_uow.invitations.mark_used.call_args.args[0] == invitation.id
    mock_uow.invitations.record_project.assert_called_once_with(invitation.id, project.id)

    # Provisioning commit, then the follow-up verification commit
    assert mock_uow.commit.call_count == 2
    verification = mock_uow.email_verifications.create.call_args.args[0]
    _, token = mock_notifier.send_verification_email.call_args.args
    assert verification.token_hash == token_digest(token)


@pytest.mark.asyncio
async def test_provision_with_existing_user_keeps_credentials(
    mock_uow, mock_notifier, invitation, make_user, password_hash
):
    existing = make_user(email="owner@newco.com", password_hash=password_hash)
    mock_uow.users.get_by_email.return_value = existing

    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(
        make_command(password="DifferentPass1!")
    )

    assert result.is_ok()
    assert result.value.is_new_user is False
    assert result.value.user.id == str(existing.id)
    assert existing.password_hash == password_hash
    mock_uow.users.create.assert_not_called()
    mock_uow.email_verifications.create.assert_not_called()
    mock_notifier.send_verification_email.assert_not_called()


@pytest.mark.asyncio
async def test_email_mismatch_writes_nothing(mock_uow, mock_notifier, invitation):
    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(
        make_command(email="intruder@else.com")
    )

    assert result.error.code == "INVITATION_EMAIL_MISMATCH"
    mock_uow.projects.create.assert_not_called()
    mock_uow.invitations.mark_used.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_used_invitation(mock_uow, mock_notifier, invitation):
    invitation.used = True

    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(make_command())

    assert result.error.code == "INVITATION_INVALID"


@pytest.mark.asyncio
async def test_expired_invitation(mock_uow, mock_notifier, invitation):
    invitation.expires_at = utcnow() - timedelta(minutes=1)

    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(make_command())

    assert result.error.code == "INVITATION_EXPIRED"


@pytest.mark.asyncio
async def test_slug_taken(mock_uow, mock_notifier, invitation, project):
    mock_uow.projects.get_by_slug.return_value = project

    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(make_command())

    assert result.error.code == "SLUG_TAKEN"
    mock_uow.projects.create.assert_not_called()


@pytest.mark.asyncio
async def test_slug_race_maps_to_slug_taken(mock_uow, mock_notifier, invitation):
    mock_uow.projects.create.side_effect = ConflictError("UNIQUE constraint failed: projects.slug")

    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(make_command())

    assert result.error.code == "SLUG_TAKEN"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_redemption_discards_writes(mock_uow, mock_notifier, invitation):
    mock_uow.invitations.mark_used.return_value = False

    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(make_command())

    assert result.error.code == "INVITATION_INVALID"
    mock_uow.projects.create.assert_not_called()
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()
    mock_notifier.send_verification_email.assert_not_called()


@pytest.mark.asyncio
async def test_invitation_is_claimed_before_any_insert(mock_uow, mock_notifier, invitation):
    writes = []
    mock_uow.invitations.mark_used.side_effect = lambda *args: writes.append("claim") or True
    mock_uow.projects.create.side_effect = lambda entity: writes.append("project") or entity
    mock_uow.users.create.side_effect = lambda entity: writes.append("user") or entity

    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(make_command())

    assert result.is_ok()
    assert writes == ["claim", "project", "user"]


@pytest.mark.asyncio
async def test_email_registered_concurrently_attaches_stored_user(
    mock_uow, mock_notifier, invitation, make_user
):
    stored = make_user(email="owner@newco.com")
    mock_uow.users.get_by_email.side_effect = [None, stored]
    mock_uow.users.create.side_effect = ConflictError("UNIQUE constraint failed: users.email")

    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(make_command())

    assert result.is_ok()
    assert result.value.is_new_user is False
    assert result.value.user.id == str(stored.id)
    assert mock_uow.invitations.mark_used.call_count == 2
    membership = mock_uow.memberships.create.call_args.args[0]
    assert membership.user_id == stored.id
    assert mock_uow.commit.call_count == 1
    mock_notifier.send_verification_email.assert_not_called()


@pytest.mark.asyncio
async def test_verification_failure_after_commit_is_swallowed(
    mock_uow, mock_notifier, invitation
):
    mock_uow.email_verifications.create.side_effect = RuntimeError("database went away")

    result = await CreateProjectUseCase(mock_uow, mock_notifier).execute(make_command())

    assert result.is_ok()
    assert result.value.is_new_user is True
