"""
Seat Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class InviteStatus(str, Enum):
    """Invite lifecycle status - pending is the only non-terminal state"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"
    revoked = "revoked"


class PlanTransition(str, Enum):
    """Kind of seat capacity change applied to an owner's family"""

    upgrade = "upgrade"
    downgrade = "downgrade"
    unchanged = "unchanged"
    cancellation = "cancellation"
    trial_expiry = "trial_expiry"
