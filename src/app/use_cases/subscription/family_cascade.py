"""
Plan Transition Cascade

Applies an owner's new seat capacity to their family inside the caller's
transaction. The family row lock is taken before any member or invite row
is touched, and every operation here is safe to repeat.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Family, PlanTransition
from src.domain.seat_ledger import available_seats

from .dtos import CascadeOutcome

logger = logging.getLogger(__name__)

# Below this capacity a family has no seat to share and is dissolved
MIN_FAMILY_SEATS = 2


def classify(previous_seats: int, new_seats: int) -> PlanTransition:
    if new_seats > previous_seats:
        return PlanTransition.upgrade
    if new_seats < previous_seats:
        return PlanTransition.downgrade
    return PlanTransition.unchanged


class FamilyCascade:
    """
    Ordered family updates for plan transitions.

    Business Rules:
    - Upgrade: max_seats raised, members and invites untouched
    - Downgrade: newest members evicted (ties: highest member id first) until
      members + 1 <= max_seats; all pending invites revoked when no seat is
      left, otherwise only the newest ones that no longer fit
    - Downgrade below 2 seats, cancellation, trial expiry: family deleted with
      its invites and members
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def lock_family(self, owner_id: UUID) -> Optional[Family]:
        return await self.uow.families.get_by_owner_id(owner_id, for_update=True)

    async def resize(
        self, family: Family, new_seats: int, transition: PlanTransition
    ) -> CascadeOutcome:
        """Apply a capacity change to an already locked family"""
        if new_seats < MIN_FAMILY_SEATS:
            return await self.dissolve(family, transition)

        outcome = CascadeOutcome(transition=transition.value)
        family.max_seats = new_seats
        await self.uow.families.update(family)

        if transition == PlanTransition.downgrade:
            await self._shrink(family, outcome)

        logger.info(
            "Family %s resized to %s seats (%s): evicted=%s revoked=%s",
            family.id,
            new_seats,
            transition.value,
            outcome.members_evicted,
            outcome.invites_revoked,
        )
        return outcome

    async def dissolve(self, family: Family, transition: PlanTransition) -> CascadeOutcome:
        """Delete invites, then members, then the family row"""
        invites_deleted = await self.uow.invites.delete_by_family(family.id)
        members_deleted = await self.uow.members.delete_by_family(family.id)
        await self.uow.families.delete(family)

        logger.info(
            "Family %s dissolved (%s): members=%s invites=%s",
            family.id,
            transition.value,
            members_deleted,
            invites_deleted,
        )
        return CascadeOutcome(
            transition=transition.value,
            family_deleted=True,
            members_evicted=members_deleted,
            invites_deleted=invites_deleted,
        )

    async def _shrink(self, family: Family, outcome: CascadeOutcome) -> None:
        members = await self.uow.members.list_newest_first(family.id)
        surplus = len(members) - (family.max_seats - 1)
        if surplus > 0:
            evicted = [m.id for m in members[:surplus]]
            outcome.members_evicted = await self.uow.members.delete_by_ids(evicted)

        remaining = len(members) - max(surplus, 0)
        available = available_seats(family, remaining)

        if available == 0:
            outcome.invites_revoked = await self.uow.invites.revoke_pending_by_family(
                family.id
            )
            return

        pending = await self.uow.invites.list_pending_by_family(family.id)
        extra = len(pending) - available
        if extra > 0:
            outcome.invites_revoked = await self.uow.invites.revoke_by_ids(
                [i.id for i in pending[:extra]]
            )
