"""
User Entity

Represents a person who can belong to multiple projects.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from tenantauth.domain.base import utcnow

if TYPE_CHECKING:
    from .project_membership import ProjectMembership


class User(SQLModel, table=True):
    """
    User entity - a person who can belong to multiple projects.

    Business Rules:
    - Email must be unique across all projects
    - password_hash is nullable: an account may exist without local credentials
    - Email verification required before login
    - Banned users cannot log in or refresh tokens
    - Global admins may log in to any project and create invitations
    - Never hard-deleted
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output

    email_verified: bool = Field(default=False)
    is_active: bool = Field(default=True)
    is_banned: bool = Field(default=False)
    ban_reason: Optional[str] = Field(default=None, max_length=500)
    is_global_admin: bool = Field(default=False)

    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_login_ip: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    memberships: list["ProjectMembership"] = Relationship(back_populates="user")

    __table_args__ = (Index("idx_user_email_verified", "email_verified"),)
