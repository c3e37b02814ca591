"""
Family Entity

Seat-sharing aggregate for exactly one owner account.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class Family(SQLModel, table=True):
    """
    Family entity - one owner, its occupied seats and pending offers.

    Business Rules:
    - max_seats always equals the owner's current max_screens
    - max_seats counts the owner: members + 1 <= max_seats
    - The row is the serialization point for every seat mutation
      (locked with SELECT ... FOR UPDATE)
    """

    __tablename__ = "families"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: UUID = Field(foreign_key="accounts.id", unique=True, index=True)
    name: str = Field(max_length=255)
    max_seats: int = Field(ge=1)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
