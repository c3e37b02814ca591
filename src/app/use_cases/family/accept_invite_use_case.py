"""
Accept Invite Use Case

Turns a pending invite into an occupied seat. This is the only path that
creates a FamilyMember, and the one most exposed to concurrent requests:
every capacity decision is taken while holding the family row lock.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import is_valid_invite_token, normalize_email
from src.domain.entities import AuditEvent, FamilyMember, InviteStatus
from src.domain.errors import (
    ALREADY_MEMBER,
    FORBIDDEN,
    HAS_ACTIVE_PLAN,
    NOT_FOUND,
    VALIDATION_ERROR,
    family_full,
    invalid_token,
    invite_not_found,
    invite_unavailable,
)
from src.domain.seat_ledger import available_seats

from .dtos import AcceptInviteResponse

logger = logging.getLogger(__name__)


class AcceptInviteUseCase:
    """
    Use case for accepting a family invite.

    Business Rules:
    - Token format, lookup, status and expiry are checked before locking;
      a stale pending invite is marked expired on the way out
    - The invite email must match the accepting account (case-insensitive)
    - Under the family lock: invite still pending, caller is not the owner,
      not already a member, owns no family, has no plan or running trial,
      and at least one seat is free
    - Exactly one member created and one invite accepted, or nothing
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, account_id: UUID, token: str, now: Optional[datetime] = None
    ) -> Result[AcceptInviteResponse]:
        """
        Execute accept invite use case.

        Args:
            account_id: Account accepting the invite
            token: Invite token
            now: Clock override (defaults to utcnow)

        Returns:
            Result with AcceptInviteResponse DTO, or Error
        """
        if not is_valid_invite_token(token):
            return Return.err(invalid_token())

        now = now or datetime.utcnow()

        async with self.uow:
            invite = await self.uow.invites.get_by_token(token)
            if invite is None:
                return Return.err(invite_not_found())

            if invite.status != InviteStatus.pending:
                return Return.err(invite_unavailable())

            if invite.is_expired(now):
                invite.status = InviteStatus.expired
                await self.uow.invites.update(invite)
                await self.uow.commit()
                return Return.err(invite_unavailable())

            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(NOT_FOUND, "Account not found"))

            if normalize_email(account.email) != normalize_email(invite.email):
                return Return.err(
                    Error(
                        FORBIDDEN,
                        "This invite was sent to a different email address",
                        reason="WRONG_EMAIL",
                    )
                )

            family = await self.uow.families.get_by_id(invite.family_id, for_update=True)
            if family is None:
                return Return.err(invite_unavailable())

            # Everything below is decided on state read under the lock
            invite = await self.uow.invites.get_by_token(token)
            if (
                invite is None
                or invite.status != InviteStatus.pending
                or invite.is_expired(now)
            ):
                return Return.err(invite_unavailable())

            if family.owner_id == account_id:
                return Return.err(
                    Error(
                        VALIDATION_ERROR,
                        "You cannot join your own family",
                        reason="OWN_FAMILY",
                    )
                )

            if await self.uow.members.get_by_account_id(account_id) is not None:
                return Return.err(
                    Error(ALREADY_MEMBER, "You are already a member of a family")
                )

            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(NOT_FOUND, "Account not found"))

            owns_family = await self.uow.families.get_by_owner_id(account_id) is not None
            if owns_family or account.has_active_plan(now):
                return Return.err(
                    Error(
                        HAS_ACTIVE_PLAN,
                        "Cancel your own subscription before joining a family",
                    )
                )

            member_count = await self.uow.members.count_by_family(family.id)
            if available_seats(family, member_count) <= 0:
                return Return.err(family_full())

            member = FamilyMember(family_id=family.id, account_id=account_id, joined_at=now)
            member = await self.uow.members.create(member)

            invite.status = InviteStatus.accepted
            invite.used_by = account_id
            invite.used_at = now
            await self.uow.invites.update(invite)

            # Doubles as the owner notification request
            audit = AuditEvent(
                family_id=family.id,
                account_id=account_id,
                action="invite_accepted",
                event_metadata={
                    "invite_id": str(invite.id),
                    "member_id": str(member.id),
                    "owner_id": str(family.owner_id),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info("Invite %s accepted into family %s", invite.id, family.id)

            return Return.ok(
                AcceptInviteResponse(
                    family_id=str(family.id),
                    family_name=family.name,
                    member_id=str(member.id),
                    joined_at=member.joined_at,
                )
            )
