"""
Revoke Invite Use Case

Withdraws a pending invite. Revoking an invite that is already accepted,
expired or revoked changes nothing and succeeds.
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import is_valid_invite_token
from src.domain.entities import AuditEvent, InviteStatus
from src.domain.errors import invalid_token, invite_not_found
from src.domain.seat_ledger import assert_owner

from .dtos import RevokeInviteResponse


class RevokeInviteUseCase:
    """
    Use case for revoking a family invite.

    Business Rules:
    - Token format is checked before any lookup
    - Only the owner of the invite's family can revoke it
    - Idempotent on terminal invites
    - Runs under the family row lock
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, owner_id: UUID, token: str) -> Result[RevokeInviteResponse]:
        if not is_valid_invite_token(token):
            return Return.err(invalid_token())

        async with self.uow:
            invite = await self.uow.invites.get_by_token(token)
            if invite is None:
                return Return.err(invite_not_found())

            family = await self.uow.families.get_by_id(invite.family_id, for_update=True)
            if family is None:
                return Return.err(invite_not_found())

            error = assert_owner(family, owner_id)
            if error:
                return Return.err(error)

            # Re-read under the lock: an acceptance may have just committed
            invite = await self.uow.invites.get_by_token(token)
            if invite is None:
                return Return.err(invite_not_found())

            if invite.status != InviteStatus.pending:
                return Return.ok(
                    RevokeInviteResponse(token=invite.token, status=invite.status.value)
                )

            invite.status = InviteStatus.revoked
            await self.uow.invites.update(invite)

            audit = AuditEvent(
                family_id=family.id,
                account_id=owner_id,
                action="invite_revoked",
                event_metadata={"invite_id": str(invite.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                RevokeInviteResponse(token=invite.token, status=invite.status.value)
            )
