from uuid import uuid4

import pytest

from tenantauth.app.services.credentials import token_digest
from tenantauth.app.use_cases.sessions import LogoutUseCase


@pytest.mark.asyncio
async def test_logout_deletes_session_by_digest(mock_uow):
    mock_uow.sessions.delete_by_refresh_token_hash.return_value = True

    result = await LogoutUseCase(mock_uow).logout("refresh-token")

    assert result.is_ok()
    mock_uow.sessions.delete_by_refresh_token_hash.assert_called_once_with(
        token_digest("refresh-token")
    )
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_logout_with_unknown_token_succeeds(mock_uow):
    mock_uow.sessions.delete_by_refresh_token_hash.return_value = False

    result = await LogoutUseCase(mock_uow).logout("never-issued")

    assert result.is_ok()


@pytest.mark.asyncio
async def test_logout_all_reports_count(mock_uow):
    user_id = uuid4()
    mock_uow.sessions.delete_all_by_user_id.return_value = 4

    result = await LogoutUseCase(mock_uow).logout_all(user_id)

    assert result.value.sessions_revoked == 4
    mock_uow.sessions.delete_all_by_user_id.assert_called_once_with(user_id)
    mock_uow.commit.assert_called_once()
