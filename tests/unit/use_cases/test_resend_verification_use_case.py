from unittest.mock import MagicMock

import pytest

from tenantauth.app.services.credentials import token_digest
from tenantauth.app.use_cases.accounts import ResendVerificationUseCase


@pytest.mark.asyncio
async def test_resend_replaces_pending_token(mock_uow, mock_notifier, make_user, project):
    user = make_user(email_verified=False)
    mock_uow.projects.get_by_api_key.return_value = project
    mock_uow.users.get_by_email.return_value = user
    mock_uow.memberships.get_by_user_and_project.return_value = MagicMock()
    mock_uow.email_verifications.delete_pending_by_user_id.return_value = 1

    result = await ResendVerificationUseCase(mock_uow, mock_notifier).execute(
        "user@acme.com", "pk_acme"
    )

    assert result.is_ok()
    mock_uow.email_verifications.delete_pending_by_user_id.assert_called_once_with(user.id)
    verification = mock_uow.email_verifications.create.call_args.args[0]
    assert verification.user_id == user.id
    mock_uow.commit.assert_called_once()

    _, token = mock_notifier.send_verification_email.call_args.args
    assert verification.token_hash == token_digest(token)


@pytest.mark.asyncio
async def test_resend_for_verified_user(mock_uow, mock_notifier, make_user, project):
    mock_uow.projects.get_by_api_key.return_value = project
    mock_uow.users.get_by_email.return_value = make_user(email_verified=True)

    result = await ResendVerificationUseCase(mock_uow, mock_notifier).execute(
        "user@acme.com", "pk_acme"
    )

    assert result.error.code == "ALREADY_VERIFIED"
    mock_uow.email_verifications.create.assert_not_called()


@pytest.mark.asyncio
async def test_resend_for_unknown_user(mock_uow, mock_notifier, project):
    mock_uow.projects.get_by_api_key.return_value = project
    mock_uow.users.get_by_email.return_value = None

    result = await ResendVerificationUseCase(mock_uow, mock_notifier).execute(
        "ghost@acme.com", "pk_acme"
    )

    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_resend_for_user_outside_project(mock_uow, mock_notifier, make_user, project):
    mock_uow.projects.get_by_api_key.return_value = project
    mock_uow.users.get_by_email.return_value = make_user(email_verified=False)
    mock_uow.memberships.get_by_user_and_project.return_value = None

    result = await ResendVerificationUseCase(mock_uow, mock_notifier).execute(
        "user@acme.com", "pk_acme"
    )

    assert result.error.code == "USER_NOT_FOUND"
    mock_uow.email_verifications.delete_pending_by_user_id.assert_not_called()


@pytest.mark.asyncio
async def test_resend_requires_active_project(mock_uow, mock_notifier):
    mock_uow.projects.get_by_api_key.return_value = None

    result = await ResendVerificationUseCase(mock_uow, mock_notifier).execute(
        "user@acme.com", "pk_nope"
    )

    assert result.error.code == "TENANT_INACTIVE_OR_UNKNOWN"
    mock_uow.users.get_by_email.assert_not_called()
