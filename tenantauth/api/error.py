from typing import Optional

from fastapi import status

from tenantauth.app.errors import ErrorCode
from tenantauth.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


STATUS_BY_CODE = {
    ErrorCode.TOKEN_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVITATION_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVITATION_EMAIL_MISMATCH: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ALREADY_VERIFIED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CURRENT_PASSWORD_INCORRECT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCOUNT_BANNED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EMAIL_NOT_VERIFIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.TENANT_INACTIVE_OR_UNKNOWN: status.HTTP_403_FORBIDDEN,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorCode.SLUG_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.TOKEN_USED: status.HTTP_409_CONFLICT,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_410_GONE,
    ErrorCode.INVITATION_EXPIRED: status.HTTP_410_GONE,
}

# Refresh and bearer authentication report every token failure as 401
TOKEN_AUTH_STATUS = {
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
}


def raise_for_error(error: Error, overrides: Optional[dict] = None):
    """Raise the HTTP exception for a use case error. Unknown codes are server errors."""
    status_code = (overrides or {}).get(error.code) or STATUS_BY_CODE.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
