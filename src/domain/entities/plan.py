"""
Plan Entity

Subscription plan catalog entry; screens is the seat capacity it grants.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Plan(SQLModel, table=True):
    __tablename__ = "plans"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    screens: int = Field(default=1, ge=1)
    active: bool = Field(default=True)
