from datetime import timedelta
from uuid import uuid4

import pytest

from tenantauth.app.services.credentials import token_digest, verify_password
from tenantauth.app.use_cases.accounts import ResetPasswordUseCase
from tenantauth.domain.base import utcnow
from tenantauth.domain.entities import PasswordReset

TOKEN = "c" * 64
NEW_PASSWORD = "BrandNewPass456!"


def make_reset(user_id, **overrides) -> PasswordReset:
    fields = dict(
        id=uuid4(),
        user_id=user_id,
        token_hash=token_digest(TOKEN),
        used=False,
        expires_at=utcnow() + timedelta(hours=1),
    )
    fields.update(overrides)
    return PasswordReset(**fields)


@pytest.mark.asyncio
async def test_reset_sets_password_and_revokes_sessions(mock_uow, make_user, password_hash):
    user = make_user(password_hash=password_hash)
    reset = make_reset(user.id)
    mock_uow.password_resets.get_by_token_hash.return_value = reset
    mock_uow.password_resets.mark_used.return_value = True
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.delete_all_by_user_id.return_value = 3

    result = await ResetPasswordUseCase(mock_uow).execute(TOKEN, NEW_PASSWORD)

    assert result.is_ok()
    assert verify_password(NEW_PASSWORD, user.password_hash)
    mock_uow.password_resets.mark_used.assert_called_once()
    assert mock_uow.password_resets.mark_used.call_args.args[0] == reset.id
    mock_uow.users.update.assert_called_once_with(user)
    mock_uow.sessions.delete_all_by_user_id.assert_called_once_with(user.id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_unknown_token(mock_uow):
    mock_uow.password_resets.get_by_token_hash.return_value = None

    result = await ResetPasswordUseCase(mock_uow).execute(TOKEN, NEW_PASSWORD)

    assert result.error.code == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_used_token_reported_before_expiry(mock_uow):
    mock_uow.password_resets.get_by_token_hash.return_value = make_reset(
        uuid4(), used=True, expires_at=utcnow() - timedelta(hours=2)
    )

    result = await ResetPasswordUseCase(mock_uow).execute(TOKEN, NEW_PASSWORD)

    assert result.error.code == "TOKEN_USED"
    mock_uow.sessions.delete_all_by_user_id.assert_not_called()


@pytest.mark.asyncio
async def test_expired_token(mock_uow):
    mock_uow.password_resets.get_by_token_hash.return_value = make_reset(
        uuid4(), expires_at=utcnow() - timedelta(seconds=1)
    )

    result = await ResetPasswordUseCase(mock_uow).execute(TOKEN, NEW_PASSWORD)

    assert result.error.code == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_lost_race_is_token_used(mock_uow, make_user):
    user = make_user()
    mock_uow.password_resets.get_by_token_hash.return_value = make_reset(user.id)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.password_resets.mark_used.return_value = False

    result = await ResetPasswordUseCase(mock_uow).execute(TOKEN, NEW_PASSWORD)

    assert result.error.code == "TOKEN_USED"
    mock_uow.sessions.delete_all_by_user_id.assert_not_called()
    mock_uow.commit.assert_not_called()
