from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from tenantauth.api.error import STATUS_BY_CODE, TOKEN_AUTH_STATUS, raise_for_error
from tenantauth.api.routes.validators import Email, Password
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.token_codec import TokenClaims, TokenCodec
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.app.use_cases.accounts import (
    ChangePasswordUseCase,
    ForgotPasswordUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    ResendVerificationUseCase,
    ResetPasswordUseCase,
    StatusResponse,
    VerifyEmailUseCase,
)
from tenantauth.app.use_cases.sessions import (
    ClientContext,
    LoginCommand,
    LoginResponse,
    LoginUseCase,
    LogoutAllResponse,
    LogoutResponse,
    LogoutUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
)
from tenantauth.depends import (
    get_api_key,
    get_client_context,
    get_config,
    get_current_user,
    get_notifier,
    get_token_codec,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class EmailRequest(BaseModel):
    """Base for payloads carrying an email; addresses are matched lower-cased"""

    email: Email = Field(..., description="User email address")


class RegisterRequest(EmailRequest):
    """
    Register HTTP request payload

    The project API key may come from the X-API-Key header or this body.
    """

    password: Password = Field(..., description="Password, see password policy")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    project_api_key: Optional[str] = Field(None, description="Project API key")
    invitation_key: Optional[str] = Field(None, description="Bootstrap admin key")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
async def register(
    request: RegisterRequest,
    api_key: Optional[str] = Depends(get_api_key),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
    config=Depends(get_config),
):
    """
    Register a user in a project.

    Raises:
        - 403 Forbidden: TENANT_INACTIVE_OR_UNKNOWN
        - 409 Conflict: DUPLICATE_EMAIL
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        project_api_key=api_key or request.project_api_key,
        invitation_key=request.invitation_key,
    )

    use_case = RegisterUseCase(uow, notifier, bootstrap_key=config.BOOTSTRAP_ADMIN_KEY)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., description="Email verification token")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def verify_email(
    request: VerifyEmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Email Verification

    Raises:
        - 400 Bad Request: TOKEN_INVALID, ALREADY_VERIFIED
        - 410 Gone: TOKEN_EXPIRED
    """
    use_case = VerifyEmailUseCase(uow, notifier)
    result = await use_case.execute(request.token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


VERIFY_PAGE = """<html>
<head><title>{title}</title></head>
<body style="font-family: Arial, sans-serif; text-align: center; padding: 50px;">
<h1>{title}</h1>
<p>{message}</p>
</body>
</html>"""


@router.get("/verify-email", response_class=HTMLResponse)
async def verify_email_page(
    token: str = "",
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """Landing page for the link in the verification email"""
    if not token:
        return HTMLResponse(
            VERIFY_PAGE.format(title="Invalid Verification Link", message="Missing token."),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    result = await VerifyEmailUseCase(uow, notifier).execute(token)
    if result.is_err():
        return HTMLResponse(
            VERIFY_PAGE.format(title="Verification Failed", message=result.error.message),
            status_code=STATUS_BY_CODE.get(result.error.code, status.HTTP_400_BAD_REQUEST),
        )

    return HTMLResponse(
        VERIFY_PAGE.format(
            title="Email Verified", message="Your account has been activated. You can log in now."
        )
    )


class ProjectEmailRequest(EmailRequest):
    project_api_key: Optional[str] = Field(None, description="Project API key")


@router.post(
    "/resend-verification", status_code=status.HTTP_200_OK, response_model=StatusResponse
)
async def resend_verification(
    request: ProjectEmailRequest,
    api_key: Optional[str] = Depends(get_api_key),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Resend Verification Email

    Raises:
        - 400 Bad Request: ALREADY_VERIFIED
        - 403 Forbidden: TENANT_INACTIVE_OR_UNKNOWN
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = ResendVerificationUseCase(uow, notifier)
    result = await use_case.execute(request.email, api_key or request.project_api_key)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(EmailRequest):
    password: str = Field(..., description="User password")
    project_api_key: Optional[str] = Field(None, description="Project API key")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    api_key: Optional[str] = Depends(get_api_key),
    client: ClientContext = Depends(get_client_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS
        - 403 Forbidden: TENANT_INACTIVE_OR_UNKNOWN, ACCOUNT_BANNED, EMAIL_NOT_VERIFIED
    """
    command = LoginCommand(
        email=request.email,
        password=request.password,
        project_api_key=api_key or request.project_api_key,
    )

    use_case = LoginUseCase(uow, token_codec)
    result = await use_case.execute(command, client)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    Refresh Access Token

    Raises:
        - 401 Unauthorized: TOKEN_INVALID, TOKEN_EXPIRED
        - 403 Forbidden: ACCOUNT_BANNED
    """
    use_case = RefreshTokenUseCase(uow, token_codec)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        raise_for_error(result.error, TOKEN_AUTH_STATUS)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(request: RefreshRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """Logout - an unknown refresh token is still a successful logout"""
    result = await LogoutUseCase(uow).logout(request.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/logout-all", status_code=status.HTTP_200_OK, response_model=LogoutAllResponse)
async def logout_all(
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Logout from every device"""
    result = await LogoutUseCase(uow).logout_all(current_user.user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/forgot-password", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def forgot_password(
    request: ProjectEmailRequest,
    api_key: Optional[str] = Depends(get_api_key),
    client: ClientContext = Depends(get_client_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Request Password Reset

    Always answers the same way so account existence is not revealed.
    """
    use_case = ForgotPasswordUseCase(uow, notifier)
    result = await use_case.execute(
        request.email, api_key or request.project_api_key, client.ip_address
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., description="Password reset token")
    new_password: Password = Field(..., description="New password, see password policy")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def reset_password(
    request: ResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Confirm Password Reset - signs the user out of every session

    Raises:
        - 400 Bad Request: TOKEN_INVALID
        - 409 Conflict: TOKEN_USED
        - 410 Gone: TOKEN_EXPIRED
    """
    use_case = ResetPasswordUseCase(uow)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., description="Current password")
    new_password: Password = Field(..., description="New password, see password policy")


@router.post("/change-password", status_code=status.HTTP_200_OK, response_model=StatusResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Password - existing sessions stay valid

    Raises:
        - 400 Bad Request: CURRENT_PASSWORD_INCORRECT
        - 404 Not Found: USER_NOT_FOUND
    """
    use_case = ChangePasswordUseCase(uow)
    result = await use_case.execute(
        current_user.user_id, request.current_password, request.new_password
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
