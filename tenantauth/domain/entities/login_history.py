"""
LoginHistory Entity

Append-only record of every login attempt.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantauth.domain.base import utcnow

from .enums import LoginMethod


class LoginHistory(SQLModel, table=True):
    """
    LoginHistory entity - immutable log of login attempts.

    Business Rules:
    - Never updated or deleted
    - Failed attempts carry a failure_reason
    """

    __tablename__ = "login_history"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    method: LoginMethod = Field(default=LoginMethod.password)
    success: bool = Field(default=False)
    failure_reason: Optional[str] = Field(default=None, max_length=255)

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=500)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_login_history_user_created", "user_id", "created_at"),)
