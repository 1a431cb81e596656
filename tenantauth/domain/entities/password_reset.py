"""
PasswordReset Entity

Secure password reset tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantauth.domain.base import utcnow


class PasswordReset(SQLModel, table=True):
    """
    PasswordReset entity - secure password reset tokens.

    Business Rules:
    - Expires after 1 hour
    - Token is stored as a SHA-256 digest of a 32-byte random token
    - Single-use: a used token can never authorize a second reset
    - Older tokens are not revoked, they simply expire
    """

    __tablename__ = "password_resets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    used: bool = Field(default=False)
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    ip_address: Optional[str] = Field(default=None, max_length=64)

    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_password_reset_expires_at", "expires_at"),)
