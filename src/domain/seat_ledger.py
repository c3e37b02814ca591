"""
Seat Ledger

Single source of truth for seat capacity math and ownership checks. Pure
functions over already-loaded state; callers are responsible for holding the
family row lock when they act on the answer.
"""

import logging
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error
from src.domain.entities import Family
from src.domain.errors import FORBIDDEN, ConsistencyFault

logger = logging.getLogger(__name__)


class SeatSummary(BaseModel):
    """Seats in use (owner included) out of the plan capacity"""

    used: int
    total: int


def available_seats(family: Family, member_count: int) -> int:
    """
    Seats that can still be offered: max_seats - 1 (owner) - members.

    Raises:
        ConsistencyFault: the family already holds more members than seats
    """
    available = family.max_seats - 1 - member_count
    if available < 0:
        logger.error(
            "Seat invariant violated for family %s: max_seats=%s members=%s",
            family.id,
            family.max_seats,
            member_count,
        )
        raise ConsistencyFault(
            "Family holds more members than its seat capacity",
            family_id=str(family.id),
        )
    return available


def assert_owner(family: Family, caller_id: UUID) -> Optional[Error]:
    """Return a FORBIDDEN error unless caller_id owns the family"""
    if family.owner_id != caller_id:
        return Error(FORBIDDEN, "Only the family owner can do this", reason="NOT_OWNER")
    return None


def has_slot_for(family: Family, member_count: int, pending_invite_count: int) -> bool:
    """
    True iff one more invite fits next to the ones already pending.

    Strictly greater: the slot being checked comes in addition to every
    pending invite.
    """
    return available_seats(family, member_count) > pending_invite_count


def seat_summary(max_seats: int, member_count: int) -> SeatSummary:
    return SeatSummary(used=member_count + 1, total=max_seats)
