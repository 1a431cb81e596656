"""
Project Entity

A tenant: an isolated customer namespace identified by its API key.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Relationship, SQLModel

from tenantauth.domain.base import utcnow

if TYPE_CHECKING:
    from .project_membership import ProjectMembership


class Project(SQLModel, table=True):
    """
    Project entity - a tenant bound to requests by its API key.

    Business Rules:
    - Created only by the provisioning flow or the bootstrap seed
    - slug and api_key are globally unique and never change
    - api_secret is stored as a SHA-256 digest, plaintext is shown once
    - Inactive projects reject registration and login
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    slug: str = Field(unique=True, index=True, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)

    api_key: str = Field(unique=True, index=True, max_length=64)
    api_secret_hash: str = Field(max_length=64)  # SHA-256 hex

    is_active: bool = Field(default=True)
    allowed_origins: list[str] = Field(default_factory=list, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    memberships: list["ProjectMembership"] = Relationship(back_populates="project")
