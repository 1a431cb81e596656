"""
Token Codec

Signs and verifies short-lived access tokens and long-lived refresh tokens.
The two kinds use different secrets so a leaked access secret cannot mint
refresh tokens.
"""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel

from tenantauth.app.errors import ErrorCode
from tenantauth.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS = "access"
REFRESH = "refresh"


class TokenClaims(BaseModel):
    """Verified claims of an access or refresh token"""

    user_id: UUID
    email: Optional[str] = None
    kind: str


class TokenCodec:
    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
    ):
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh tokens must use different secrets")
        self._secrets = {ACCESS: access_secret, REFRESH: refresh_secret}
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @property
    def access_token_expires_in(self) -> int:
        """Access token lifetime in seconds"""
        return int(self.access_ttl.total_seconds())

    def issue_access_token(self, user_id: UUID, email: str) -> str:
        return self._encode(
            {"sub": str(user_id), "email": email}, ACCESS, self.access_ttl
        )

    def issue_refresh_token(self, user_id: UUID) -> str:
        # jti keeps two refresh tokens minted in the same second distinct
        return self._encode(
            {"sub": str(user_id), "jti": secrets.token_hex(16)}, REFRESH, self.refresh_ttl
        )

    def verify(self, token: str, kind: str) -> Result[TokenClaims]:
        """
        Verify signature, expiry and kind.

        Errors:
            - TOKEN_EXPIRED: signature valid but past exp
            - TOKEN_INVALID: bad signature, malformed, or wrong kind
        """
        secret = self._secrets.get(kind)
        if secret is None:
            raise ValueError(f"Unknown token kind: {kind}")

        try:
            payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError:
            return Return.err(Error(ErrorCode.TOKEN_EXPIRED, f"{kind.capitalize()} token expired"))
        except JWTError:
            logger.warning("Rejected malformed or forged %s token", kind)
            return Return.err(Error(ErrorCode.TOKEN_INVALID, f"Invalid {kind} token"))

        if payload.get("type") != kind:
            logger.warning("Rejected %s token presented as %s", payload.get("type"), kind)
            return Return.err(Error(ErrorCode.TOKEN_INVALID, f"Invalid {kind} token"))

        try:
            user_id = UUID(payload["sub"])
        except (KeyError, ValueError):
            return Return.err(Error(ErrorCode.TOKEN_INVALID, f"Invalid {kind} token"))

        return Return.ok(TokenClaims(user_id=user_id, email=payload.get("email"), kind=kind))

    def verify_access_token(self, token: str) -> Result[TokenClaims]:
        return self.verify(token, ACCESS)

    def verify_refresh_token(self, token: str) -> Result[TokenClaims]:
        return self.verify(token, REFRESH)

    def _encode(self, claims: dict, kind: str, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {**claims, "type": kind, "iat": now, "exp": now + ttl}
        return jwt.encode(payload, self._secrets[kind], algorithm=ALGORITHM)
