"""
Account Entity

Identity record owned by the user-account system. Seat operations only read
it; the plan transition cascade is the single writer of the plan fields.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Account(SQLModel, table=True):
    """
    Account entity - a user and its current plan assignment.

    Business Rules:
    - max_screens mirrors the plan's screens, 1 when there is no plan
    - A running trial (trial_ends_at in the future) counts as an active plan
    - An account may own one family or be a member of one family, never both
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: Optional[str] = Field(default=None, max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)

    plan_id: Optional[UUID] = Field(default=None, foreign_key="plans.id")
    max_screens: int = Field(default=1)
    trial_ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_account_trial_ends_at", "trial_ends_at"),)

    def has_active_plan(self, now: datetime) -> bool:
        if self.plan_id is not None:
            return True
        return self.trial_ends_at is not None and self.trial_ends_at > now

    def clear_plan(self) -> None:
        self.plan_id = None
        self.max_screens = 1
        self.trial_ends_at = None
