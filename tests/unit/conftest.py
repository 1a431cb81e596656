from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from tenantauth.app.services.credentials import hash_password
from tenantauth.app.services.token_codec import TokenCodec
from tenantauth.domain.entities import Project, User

PASSWORD = "SecurePass123!"

REPOSITORIES = (
    "users",
    "projects",
    "memberships",
    "email_verifications",
    "password_resets",
    "sessions",
    "invitations",
    "login_history",
)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Every repository method is awaitable; create() echoes the entity back
    for name in REPOSITORIES:
        repository = AsyncMock()
        repository.create.side_effect = lambda entity: entity
        setattr(uow, name, repository)

    return uow


@pytest.fixture
def mock_notifier():
    notifier = MagicMock()
    notifier.send_verification_email = AsyncMock(return_value=True)
    notifier.send_welcome_email = AsyncMock(return_value=True)
    notifier.send_password_reset_email = AsyncMock(return_value=True)
    notifier.send_project_invitation_email = AsyncMock(return_value=True)
    return notifier


@pytest.fixture
def token_codec():
    return TokenCodec(
        access_secret="unit-access-secret",
        refresh_secret="unit-refresh-secret",
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
    )


@pytest.fixture
def make_user():
    def factory(**overrides) -> User:
        fields = dict(
            id=uuid4(),
            email="user@acme.com",
            first_name="Jane",
            last_name="Doe",
            password_hash=None,
            email_verified=True,
            is_banned=False,
            is_global_admin=False,
        )
        fields.update(overrides)
        return User(**fields)

    return factory


@pytest.fixture
def project():
    return Project(
        id=uuid4(),
        name="Acme",
        slug="acme",
        api_key="pk_acme",
        api_secret_hash="0" * 64,
        is_active=True,
    )


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt hash of PASSWORD, computed once per run"""
    return hash_password(PASSWORD)
