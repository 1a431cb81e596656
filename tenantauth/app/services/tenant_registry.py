"""
Tenant Registry

Resolves the project bound to a request by its API key.
"""

from typing import Optional

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.domain.entities import Project
from tenantauth.libs.result import Error, Result, Return


async def resolve_active_project(uow: UnitOfWork, api_key: Optional[str]) -> Result[Project]:
    """
    Unknown and inactive keys get the same error so callers cannot probe
    which projects exist.
    """
    if not api_key:
        return Return.err(
            Error(ErrorCode.TENANT_INACTIVE_OR_UNKNOWN, "Project API key is required")
        )

    project = await uow.projects.get_by_api_key(api_key)
    if project is None or not project.is_active:
        return Return.err(
            Error(ErrorCode.TENANT_INACTIVE_OR_UNKNOWN, "Invalid or inactive project API key")
        )

    return Return.ok(project)
