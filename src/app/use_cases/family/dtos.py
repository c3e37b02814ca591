"""
Family Use Case DTOs (Data Transfer Objects)

Response classes for the family seat domain. Views expose display names
only: account ids and member email addresses never leave the service.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.seat_ledger import SeatSummary


# ============================================================================
# Response DTOs
# ============================================================================


class InviteSummary(BaseModel):
    """Response for create invite use case"""

    id: str
    token: str
    email: str
    status: str
    expires_at: datetime


class RevokeInviteResponse(BaseModel):
    """Response for revoke invite use case"""

    token: str
    status: str


class AcceptInviteResponse(BaseModel):
    """Response for accept invite use case"""

    family_id: str
    family_name: str
    member_id: str
    joined_at: datetime


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    member_id: str
    status: str


class LeaveFamilyResponse(BaseModel):
    """Response for leave family use case"""

    status: str


class FamilyCreatedResponse(BaseModel):
    """Response for create family use case"""

    id: str
    name: str
    max_seats: int
    seats: SeatSummary


# ============================================================================
# Read model
# ============================================================================


class MemberView(BaseModel):
    id: str
    name: str
    joined_at: datetime


class PendingInviteView(BaseModel):
    id: str
    token: str
    email: str
    expires_at: datetime


class OwnedFamilyView(BaseModel):
    """Family seen by its owner"""

    id: str
    name: str
    max_seats: int
    members: List[MemberView]
    pending_invites: List[PendingInviteView]


class MembershipView(BaseModel):
    """Family seen by one of its members"""

    family_name: str
    owner_name: str
    members: List[str]


class FamilyView(BaseModel):
    """Response for get family view use case"""

    owned_family: Optional[OwnedFamilyView] = None
    membership: Optional[MembershipView] = None
    seats: Optional[SeatSummary] = None
