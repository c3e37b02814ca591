"""
FamilyMember Entity

One occupied seat in a family.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class FamilyMember(SQLModel, table=True):
    """
    FamilyMember entity - a member account occupying one seat.

    Business Rules:
    - account_id is unique: an account belongs to at most one family
    - Created only by invite acceptance
    - Deleted by owner removal, leaving, or plan cascade eviction
    """

    __tablename__ = "family_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    family_id: UUID = Field(
        foreign_key="families.id", ondelete="CASCADE", nullable=False, index=True
    )
    account_id: UUID = Field(foreign_key="accounts.id", unique=True, nullable=False)

    # Timestamps
    joined_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_family_member_joined_at", "family_id", "joined_at"),)
