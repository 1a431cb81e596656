"""
Invitation Ledger

Redemption rules for project invitations:
Pending -> Used (terminal) or Pending -> Expired (by clock).
"""

from datetime import datetime
from typing import Optional

from tenantauth.app.errors import ErrorCode
from tenantauth.app.services.unit_of_work import UnitOfWork
from tenantauth.domain.entities import ProjectInvitation
from tenantauth.libs.result import Error, Result, Return

INVITATION_TTL_DAYS = 3


def check_redeemable(
    invitation: Optional[ProjectInvitation], email: str, now: datetime
) -> Result[ProjectInvitation]:
    """
    Read-side checks, in order: exists and unused, unexpired, email match.

    Email comparison is exact: the key was issued to that address as stored.
    """
    if invitation is None:
        return Return.err(Error(ErrorCode.INVITATION_INVALID, "Invalid invitation key"))

    if invitation.used:
        return Return.err(Error(ErrorCode.INVITATION_INVALID, "Invitation already used"))

    if now > invitation.expires_at:
        return Return.err(Error(ErrorCode.INVITATION_EXPIRED, "Invitation expired"))

    if invitation.email is not None and invitation.email != email:
        return Return.err(
            Error(ErrorCode.INVITATION_EMAIL_MISMATCH, "Email does not match invitation")
        )

    return Return.ok(invitation)


async def consume(uow: UnitOfWork, invitation: ProjectInvitation, now: datetime) -> Result[None]:
    """
    Mark the invitation used inside the caller's transaction.

    Run it before any other write of the redemption: when another
    transaction already flipped the flag this fails and the caller
    rolls back having written nothing.
    """
    if not await uow.invitations.mark_used(invitation.id, now):
        return Return.err(Error(ErrorCode.INVITATION_INVALID, "Invitation already used"))
    return Return.ok(None)
