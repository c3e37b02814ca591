"""
Create Invite Use Case

Offers one seat of the caller's family to an email address.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.family_repository import FamilyAlreadyExists
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import generate_invite_token, is_valid_email, normalize_email
from src.domain.entities import AuditEvent, FamilyInvite, InviteStatus
from src.domain.errors import CAPACITY_EXCEEDED, FORBIDDEN, NOT_FOUND, VALIDATION_ERROR
from src.domain.seat_ledger import available_seats, has_slot_for

from .dtos import InviteSummary
from .family_setup import can_own_family, create_family_for

DEFAULT_INVITE_TTL_DAYS = 7
DEFAULT_MAX_PENDING_INVITES = 5


class CreateInviteUseCase:
    """
    Use case for inviting an email address into the caller's family.

    Business Rules:
    - Only the owner invites; the family is created on the first invite
      when the owner's plan has at least 2 screens
    - Pending invites never outnumber the available seats
    - At most max_pending_invites pending invites per family
    - Invites expire invite_ttl_days after creation
    - Runs under the family row lock
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invite_ttl_days: int = DEFAULT_INVITE_TTL_DAYS,
        max_pending_invites: int = DEFAULT_MAX_PENDING_INVITES,
    ):
        self.uow = uow
        self.invite_ttl_days = invite_ttl_days
        self.max_pending_invites = max_pending_invites

    async def execute(
        self, owner_id: UUID, email: str, now: Optional[datetime] = None
    ) -> Result[InviteSummary]:
        """
        Execute create invite use case.

        Args:
            owner_id: Account sending the invite
            email: Address the seat is offered to
            now: Clock override (defaults to utcnow)

        Returns:
            Result with InviteSummary DTO, or Error
        """
        email = normalize_email(email or "")
        if not is_valid_email(email):
            return Return.err(Error(VALIDATION_ERROR, "Invalid email address"))

        now = now or datetime.utcnow()

        async with self.uow:
            family = await self.uow.families.get_by_owner_id(owner_id, for_update=True)

            if family is None:
                owner = await self.uow.accounts.get_by_id(owner_id)
                if owner is None:
                    return Return.err(Error(NOT_FOUND, "Account not found"))

                if not can_own_family(owner):
                    return Return.err(
                        Error(
                            FORBIDDEN,
                            "Your plan does not include family seats",
                            reason="PLAN_NO_FAMILY",
                        )
                    )

                if await self.uow.members.get_by_account_id(owner_id) is not None:
                    return Return.err(
                        Error(
                            FORBIDDEN,
                            "Members of another family cannot send invites",
                            reason="MEMBER_OF_ANOTHER_FAMILY",
                        )
                    )

                try:
                    family = await create_family_for(self.uow, owner)
                except FamilyAlreadyExists:
                    # A concurrent first invite created it; continue under its lock
                    await self.uow.rollback()
                    family = await self.uow.families.get_by_owner_id(
                        owner_id, for_update=True
                    )
                    if family is None:
                        raise

            # Stale pending invites must not hold seats
            await self.uow.invites.expire_pending(now, family.id)

            member_count = await self.uow.members.count_by_family(family.id)
            pending_count = await self.uow.invites.count_pending_by_family(family.id)

            if not has_slot_for(family, member_count, pending_count):
                if available_seats(family, member_count) == 0:
                    return Return.err(
                        Error(
                            CAPACITY_EXCEEDED,
                            f"Limit of {family.max_seats} seats reached. "
                            "Remove a member to invite again",
                            reason="FAMILY_FULL",
                        )
                    )
                return Return.err(
                    Error(
                        CAPACITY_EXCEEDED,
                        "Every available seat already has a pending invite",
                        reason="PENDING_INVITES_LIMIT",
                    )
                )

            if pending_count >= self.max_pending_invites:
                return Return.err(
                    Error(
                        CAPACITY_EXCEEDED,
                        f"At most {self.max_pending_invites} invites can be pending",
                        reason="MAX_PENDING_INVITES",
                    )
                )

            invite = FamilyInvite(
                token=generate_invite_token(),
                family_id=family.id,
                email=email,
                status=InviteStatus.pending,
                expires_at=now + timedelta(days=self.invite_ttl_days),
                created_at=now,
            )
            invite = await self.uow.invites.create(invite)

            # Email delivery is external; the audit row is the send request
            audit = AuditEvent(
                family_id=family.id,
                account_id=owner_id,
                action="invite_sent",
                event_metadata={"invite_id": str(invite.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                InviteSummary(
                    id=str(invite.id),
                    token=invite.token,
                    email=invite.email,
                    status=invite.status.value,
                    expires_at=invite.expires_at,
                )
            )
