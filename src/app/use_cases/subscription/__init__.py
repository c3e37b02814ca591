"""
Subscription Use Cases

Plan transitions and the family cascade they trigger.
"""

from .apply_plan_change_use_case import ApplyPlanChangeUseCase
from .cancel_subscription_use_case import CancelSubscriptionUseCase
from .dtos import CancelSubscriptionResponse, CascadeOutcome, PlanChangeResponse
from .family_cascade import FamilyCascade

__all__ = [
    "ApplyPlanChangeUseCase",
    "CancelSubscriptionUseCase",
    "FamilyCascade",
    "CascadeOutcome",
    "PlanChangeResponse",
    "CancelSubscriptionResponse",
]
