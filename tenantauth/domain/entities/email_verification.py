"""
EmailVerification Entity

Single-use, time-boxed email verification tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantauth.domain.base import utcnow


class EmailVerification(SQLModel, table=True):
    """
    EmailVerification entity - pending or completed email verification.

    Business Rules:
    - Expires after 24 hours
    - At most one pending (verified=False) record per user; issuing a new
      one deletes the previous pending records
    - Verified records are immutable history
    - Token is stored as a SHA-256 digest
    """

    __tablename__ = "email_verifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    email: str = Field(max_length=255)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    verified: bool = Field(default=False)
    verified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_email_verification_user_verified", "user_id", "verified"),)
