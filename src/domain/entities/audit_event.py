"""
AuditEvent Entity

Immutable log of seat allocation events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of seat allocation events.

    Business Rules:
    - Immutable (never updated or deleted)
    - family_id is kept as a plain value so events outlive the family
    - account_id nullable for system actions (sweeps, billing events)
    - Metadata never carries member email addresses
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    family_id: Optional[UUID] = Field(default=None, index=True)
    account_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "invite_sent", "trial_expired"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_family_action", "family_id", "action"),
    )
