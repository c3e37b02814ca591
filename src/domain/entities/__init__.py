"""
Seat Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import InviteStatus, PlanTransition

# Export all entities
from .plan import Plan
from .account import Account
from .family import Family
from .family_member import FamilyMember
from .family_invite import FamilyInvite
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "InviteStatus",
    "PlanTransition",
    # Entities
    "Plan",
    "Account",
    "Family",
    "FamilyMember",
    "FamilyInvite",
    "AuditEvent",
]
