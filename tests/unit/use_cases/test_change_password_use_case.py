import pytest

from tenantauth.app.services.credentials import verify_password
from tenantauth.app.use_cases.accounts import ChangePasswordUseCase

PASSWORD = "SecurePass123!"


@pytest.mark.asyncio
async def test_change_password(mock_uow, make_user, password_hash):
    user = make_user(password_hash=password_hash)
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(user.id, PASSWORD, "Another1Pass!")

    assert result.is_ok()
    assert verify_password("Another1Pass!", user.password_hash)
    mock_uow.users.update.assert_called_once_with(user)
    mock_uow.commit.assert_called_once()
    # Sessions survive a voluntary change
    mock_uow.sessions.delete_all_by_user_id.assert_not_called()


@pytest.mark.asyncio
async def test_wrong_current_password(mock_uow, make_user, password_hash):
    user = make_user(password_hash=password_hash)
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(user.id, "WrongPass123!", "Another1Pass!")

    assert result.error.code == "CURRENT_PASSWORD_INCORRECT"
    assert user.password_hash == password_hash
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_account_without_local_password(mock_uow, make_user):
    user = make_user(password_hash=None)
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(user.id, PASSWORD, "Another1Pass!")

    assert result.error.code == "USER_NOT_FOUND"
