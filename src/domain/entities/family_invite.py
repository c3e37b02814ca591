"""
FamilyInvite Entity

Time-boxed, single-use offer of one seat.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import InviteStatus


class FamilyInvite(SQLModel, table=True):
    """
    FamilyInvite entity - offer of one seat to an email address.

    Business Rules:
    - Token is an opaque CUID-like id, never a UUID
    - Expires 7 days after creation
    - Status only moves forward out of pending; invites are never reused
    - pending invites never outnumber the family's available seats
    """

    __tablename__ = "family_invites"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    token: str = Field(unique=True, index=True, max_length=32)

    family_id: UUID = Field(
        foreign_key="families.id", ondelete="CASCADE", nullable=False, index=True
    )
    email: str = Field(max_length=254, nullable=False)

    status: InviteStatus = Field(default=InviteStatus.pending)

    used_by: Optional[UUID] = Field(default=None)
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_family_invite_status_expires_at", "status", "expires_at"),
        Index("idx_family_invite_family_status", "family_id", "status"),
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
