"""
Family Seat Use Cases

Invite lifecycle, acceptance and membership management.
"""

from .accept_invite_use_case import AcceptInviteUseCase
from .create_family_use_case import CreateFamilyUseCase
from .create_invite_use_case import CreateInviteUseCase
from .dtos import (
    AcceptInviteResponse,
    FamilyCreatedResponse,
    FamilyView,
    InviteSummary,
    LeaveFamilyResponse,
    MembershipView,
    MemberView,
    OwnedFamilyView,
    PendingInviteView,
    RemoveMemberResponse,
    RevokeInviteResponse,
)
from .get_family_view_use_case import GetFamilyViewUseCase
from .leave_family_use_case import LeaveFamilyUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .revoke_invite_use_case import RevokeInviteUseCase

__all__ = [
    "CreateInviteUseCase",
    "RevokeInviteUseCase",
    "AcceptInviteUseCase",
    "RemoveMemberUseCase",
    "LeaveFamilyUseCase",
    "CreateFamilyUseCase",
    "GetFamilyViewUseCase",
    "InviteSummary",
    "RevokeInviteResponse",
    "AcceptInviteResponse",
    "RemoveMemberResponse",
    "LeaveFamilyResponse",
    "FamilyCreatedResponse",
    "FamilyView",
    "OwnedFamilyView",
    "MembershipView",
    "MemberView",
    "PendingInviteView",
]
