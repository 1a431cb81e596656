import pytest

from tenantauth.app.services.tenant_registry import resolve_active_project
from tenantauth.domain.entities import Project


def make_project(**overrides) -> Project:
    fields = dict(
        name="Acme", slug="acme", api_key="pk_acme", api_secret_hash="0" * 64, is_active=True
    )
    fields.update(overrides)
    return Project(**fields)


@pytest.mark.asyncio
async def test_active_project_resolves(mock_uow):
    project = make_project()
    mock_uow.projects.get_by_api_key.return_value = project

    result = await resolve_active_project(mock_uow, "pk_acme")

    assert result.value is project
    mock_uow.projects.get_by_api_key.assert_called_once_with("pk_acme")


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", [None, ""])
async def test_missing_key(mock_uow, api_key):
    result = await resolve_active_project(mock_uow, api_key)

    assert result.error.code == "TENANT_INACTIVE_OR_UNKNOWN"
    mock_uow.projects.get_by_api_key.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_and_inactive_look_the_same(mock_uow):
    mock_uow.projects.get_by_api_key.return_value = None
    unknown = await resolve_active_project(mock_uow, "pk_nope")

    mock_uow.projects.get_by_api_key.return_value = make_project(is_active=False)
    inactive = await resolve_active_project(mock_uow, "pk_acme")

    assert unknown.error.code == inactive.error.code == "TENANT_INACTIVE_OR_UNKNOWN"
    assert unknown.error.message == inactive.error.message
