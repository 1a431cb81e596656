"""
Session Entity

One logged-in device or browser, backed by a refresh token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from tenantauth.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - stores refresh tokens for authentication.

    Business Rules:
    - Refresh token stored as a SHA-256 digest, unique
    - Expires after 7 days
    - Deleted on logout, logout-all and password reset
    - Refresh does not rotate the token, it bumps last_used_at
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    refresh_token_hash: str = Field(unique=True, index=True, max_length=64)

    ip_address: Optional[str] = Field(default=None, max_length=64)
    device_info: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    expires_at: datetime = Field(sa_column=Column(DateTime))
    last_used_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)
