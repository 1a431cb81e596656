from typing import Optional

from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tenantauth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenantauth.api.error import TOKEN_AUTH_STATUS, raise_for_error
from tenantauth.app.services.notifier import Notifier
from tenantauth.app.services.token_codec import TokenClaims, TokenCodec
from tenantauth.app.use_cases.sessions import ClientContext

security = HTTPBearer()


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_config(request: Request):
    return request.app.state.config


def get_client_context(
    request: Request, user_agent: Optional[str] = Header(None)
) -> ClientContext:
    ip_address = request.client.host if request.client else None
    return ClientContext(ip_address=ip_address, user_agent=user_agent)


def get_api_key(x_api_key: Optional[str] = Header(None)) -> Optional[str]:
    """Project API key from the X-API-Key header"""
    return x_api_key


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    token_codec: TokenCodec = Depends(get_token_codec),
) -> TokenClaims:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Raises:
        ClientError: 401 if token is invalid or expired
    """
    result = token_codec.verify_access_token(credentials.credentials)
    if result.is_err():
        raise_for_error(result.error, TOKEN_AUTH_STATUS)
    return result.value
