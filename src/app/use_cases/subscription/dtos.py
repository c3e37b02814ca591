"""
Subscription Use Case DTOs (Data Transfer Objects)

Outcome of plan transitions as seen by the billing integration and users.
"""

from typing import Optional

from pydantic import BaseModel


class CascadeOutcome(BaseModel):
    """What a plan transition did to the owner's family"""

    transition: str
    family_deleted: bool = False
    members_evicted: int = 0
    invites_revoked: int = 0
    invites_deleted: int = 0


class PlanChangeResponse(BaseModel):
    """Response for apply plan change use case"""

    account_id: str
    plan_id: str
    max_screens: int
    outcome: CascadeOutcome


class CancelSubscriptionResponse(BaseModel):
    """Response for cancel subscription use case"""

    account_id: str
    plan_id: Optional[str] = None
    max_screens: int
    outcome: CascadeOutcome
