"""
ProjectInvitation Entity

Single-use keys authorizing creation of one new project.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantauth.domain.base import utcnow


class ProjectInvitation(SQLModel, table=True):
    """
    ProjectInvitation entity - capability to create exactly one project.

    Business Rules:
    - Created by a global admin, expires after 3 days
    - key is 32 random bytes hex encoded, globally unique
    - used=True is terminal; it is set in the same transaction that
      creates the project
    - If email is set, only that exact email may redeem the key
    """

    __tablename__ = "project_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    key: str = Field(unique=True, index=True, max_length=64)
    email: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=500)

    used: bool = Field(default=False)
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    used_by_project_id: Optional[UUID] = Field(default=None, foreign_key="projects.id")

    created_by_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_project_invitation_used", "used"),)
