"""
ProjectMembership Entity

Links a User to a Project with a role.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from tenantauth.domain.base import utcnow

from .enums import MembershipRole

if TYPE_CHECKING:
    from .project import Project
    from .user import User


class ProjectMembership(SQLModel, table=True):
    """
    ProjectMembership entity - links User to Project with a role.

    Business Rules:
    - (user_id, project_id) must be unique
    - Created at registration (role=user) or provisioning (role=admin)
    - Never mutated
    """

    __tablename__ = "project_memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    project_id: UUID = Field(foreign_key="projects.id", nullable=False, index=True)

    role: MembershipRole = Field(default=MembershipRole.user, nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    user: "User" = Relationship(back_populates="memberships")
    project: "Project" = Relationship(back_populates="memberships")

    __table_args__ = (
        Index("idx_membership_user_project", "user_id", "project_id", unique=True),
    )
