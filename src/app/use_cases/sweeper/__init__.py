"""
Expiry Sweeper Use Cases

Batch entry points called by the scheduler.
"""

from .dtos import SweepResponse
from .expire_invites_use_case import ExpireInvitesUseCase
from .expire_trials_use_case import ExpireTrialsUseCase

__all__ = [
    "ExpireInvitesUseCase",
    "ExpireTrialsUseCase",
    "SweepResponse",
]
