"""
Get Family View Use Case

Read model of the caller's family, as owner and/or as member.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NOT_FOUND
from src.domain.seat_ledger import seat_summary

from .dtos import (
    FamilyView,
    MembershipView,
    MemberView,
    OwnedFamilyView,
    PendingInviteView,
)
from .family_setup import UNNAMED, can_own_family, display_name


class GetFamilyViewUseCase:
    """
    Use case for reading the caller's family.

    Business Rules:
    - Owners see members (display name, joined_at) and non-expired pending invites
    - Members see the family name, the owner and the other members by name
    - Owners with a shareable plan and no family yet still get a seat summary
    - No account ids and no member email addresses are exposed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, account_id: UUID, now: Optional[datetime] = None
    ) -> Result[FamilyView]:
        now = now or datetime.utcnow()

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(NOT_FOUND, "Account not found"))

            view = FamilyView()

            family = await self.uow.families.get_by_owner_id(account_id)
            if family is not None:
                members = await self.uow.members.list_by_family(family.id)
                names = await self._names_by_account(m.account_id for m in members)
                invites = await self.uow.invites.list_pending_by_family(family.id, now)

                view.owned_family = OwnedFamilyView(
                    id=str(family.id),
                    name=family.name,
                    max_seats=family.max_seats,
                    members=[
                        MemberView(
                            id=str(m.id),
                            name=names.get(m.account_id, UNNAMED),
                            joined_at=m.joined_at,
                        )
                        for m in members
                    ],
                    pending_invites=[
                        PendingInviteView(
                            id=str(i.id),
                            token=i.token,
                            email=i.email,
                            expires_at=i.expires_at,
                        )
                        for i in invites
                    ],
                )
                view.seats = seat_summary(family.max_seats, len(members))
            elif can_own_family(account):
                view.seats = seat_summary(account.max_screens, 0)

            membership = await self.uow.members.get_by_account_id(account_id)
            if membership is not None:
                joined = await self.uow.families.get_by_id(membership.family_id)
                owner = await self.uow.accounts.get_by_id(joined.owner_id)
                members = await self.uow.members.list_by_family(joined.id)
                names = await self._names_by_account(m.account_id for m in members)

                view.membership = MembershipView(
                    family_name=joined.name,
                    owner_name=display_name(owner),
                    members=[names[m.account_id] for m in members if m.account_id in names],
                )

            return Return.ok(view)

    async def _names_by_account(self, account_ids) -> dict:
        accounts = await self.uow.accounts.get_by_ids(list(account_ids))
        return {a.id: display_name(a) for a in accounts}
