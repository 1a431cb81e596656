from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from tenantauth.api.error import raise_for_error
from tenantauth.api.routes.validators import SLUG_PATTERN, Email, Password
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.token_codec import TokenClaims
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.app.use_cases.projects import (
    CreateInvitationCommand,
    CreateInvitationUseCase,
    CreateProjectCommand,
    CreateProjectResponse,
    CreateProjectUseCase,
    InvitationResponse,
)
from tenantauth.depends import get_config, get_current_user, get_notifier, get_unit_of_work

router = APIRouter(prefix="/projects", tags=["Projects"])


class CreateInvitationRequest(BaseModel):
    email: Email = Field(..., description="Email the invitation is bound to")
    description: Optional[str] = Field(None, max_length=500)


@router.post(
    "/invitations", status_code=status.HTTP_201_CREATED, response_model=InvitationResponse
)
async def create_invitation(
    request: CreateInvitationRequest,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
    config=Depends(get_config),
):
    """
    Create Project Invitation - global admins only

    Raises:
        - 401 Unauthorized: missing, invalid or expired access token
        - 403 Forbidden: FORBIDDEN
    """
    command = CreateInvitationCommand(email=request.email, description=request.description)

    use_case = CreateInvitationUseCase(uow, notifier, config.FRONTEND_URL)
    result = await use_case.execute(current_user.user_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class CreateProjectRequest(BaseModel):
    """
    Create project HTTP request payload

    The email must be the one the invitation was issued to.
    """

    invitation_key: str = Field(..., description="Project invitation key")
    project_name: str = Field(..., min_length=1, max_length=100)
    project_slug: str = Field(..., min_length=1, max_length=50, pattern=SLUG_PATTERN)
    project_description: Optional[str] = Field(None, max_length=500)
    email: Email = Field(..., description="Admin email address")
    password: Password = Field(..., description="Admin password, see password policy")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateProjectResponse)
async def create_project(
    request: CreateProjectRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Create Project from an invitation

    Returns the project API secret; it is never shown again.

    Raises:
        - 400 Bad Request: INVITATION_INVALID, INVITATION_EMAIL_MISMATCH
        - 409 Conflict: SLUG_TAKEN
        - 410 Gone: INVITATION_EXPIRED
    """
    command = CreateProjectCommand(**request.model_dump())

    use_case = CreateProjectUseCase(uow, notifier)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
