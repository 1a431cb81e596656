"""
BootstrapClaim Entity

Marker row written by the one-time global admin bootstrap.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel

from tenantauth.domain.base import utcnow

BOOTSTRAP_CLAIM_ID = 1


class BootstrapClaim(SQLModel, table=True):
    """
    BootstrapClaim entity - at most one row per deployment.

    Business Rules:
    - The primary key is fixed, so a second bootstrap fails on insert
    - Written in the same transaction as the global admin it created
    """

    __tablename__ = "bootstrap_claims"

    id: int = Field(default=BOOTSTRAP_CLAIM_ID, primary_key=True)
    email: str = Field(max_length=255)
    claimed_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
