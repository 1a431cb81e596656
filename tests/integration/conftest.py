from datetime import datetime, timedelta
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tenantauth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenantauth.api.app import create_app
from tenantauth.app.services.credentials import generate_api_credentials, hash_password
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.token_codec import TokenCodec
from tenantauth.depends import get_notifier, get_token_codec, get_unit_of_work
from tenantauth.domain.entities import MembershipRole, Project, ProjectMembership, User

PASSWORD = "SecurePass123!"
BOOTSTRAP_KEY = "bootstrap-secret"


class IntegrationConfig(ApplicationConfig):
    BOOTSTRAP_ADMIN_KEY = BOOTSTRAP_KEY
    FRONTEND_URL = "http://frontend.test"
    API_PREFIX = ""


class RecordingNotifier(Notifier):
    """Keeps every message instead of sending it"""

    def __init__(self):
        self.sent = []

    async def send_verification_email(self, recipient: str, token: str) -> bool:
        self.sent.append(("verification", recipient, token))
        return True

    async def send_welcome_email(self, recipient: str, first_name: str) -> bool:
        self.sent.append(("welcome", recipient, first_name))
        return True

    async def send_password_reset_email(self, recipient: str, token: str) -> bool:
        self.sent.append(("password_reset", recipient, token))
        return True

    async def send_project_invitation_email(
        self, recipient: str, key: str, expires_at: datetime
    ) -> bool:
        self.sent.append(("project_invitation", recipient, key))
        return True

    def last(self, kind: str, recipient: str) -> Optional[str]:
        for sent_kind, sent_to, payload in reversed(self.sent):
            if sent_kind == kind and sent_to == recipient:
                return payload
        return None


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def token_codec():
    return TokenCodec(
        access_secret="integration-access-secret",
        refresh_secret="integration-refresh-secret",
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
    )


@pytest_asyncio.fixture
async def client(db_session, notifier, token_codec):
    app = create_app(IntegrationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_token_codec] = lambda: token_codec

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def project(db_session) -> Project:
    credentials = generate_api_credentials()
    project = Project(
        name="Acme",
        slug="acme",
        api_key=credentials.api_key,
        api_secret_hash=credentials.api_secret_hash,
    )
    db_session.add(project)
    await db_session.commit()
    return project


@pytest.fixture
def api_headers(project):
    return {"X-API-Key": project.api_key}


@pytest.fixture
def create_user(db_session):
    async def factory(
        email: str,
        project: Optional[Project] = None,
        role: MembershipRole = MembershipRole.user,
        **overrides,
    ) -> User:
        fields = dict(
            email=email,
            first_name="Test",
            last_name="User",
            password_hash=hash_password(PASSWORD),
            email_verified=True,
        )
        fields.update(overrides)
        user = User(**fields)
        db_session.add(user)
        await db_session.flush()
        if project is not None:
            db_session.add(ProjectMembership(user_id=user.id, project_id=project.id, role=role))
        await db_session.commit()
        return user

    return factory


@pytest.fixture
def login(client, api_headers):
    async def do_login(email: str, password: str = PASSWORD):
        return await client.post(
            "/auth/login", json={"email": email, "password": password}, headers=api_headers
        )

    return do_login
