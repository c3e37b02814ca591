from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Family


class FamilyAlreadyExists(Exception):
    """The owner already has a family (concurrent creation lost the race)"""

    def __init__(self, owner_id: UUID):
        self.owner_id = owner_id
        super().__init__(f"Account {owner_id} already owns a family")


class IFamilyRepository(ABC):
    """Family repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, family_id: UUID, for_update: bool = False) -> Optional[Family]:
        """
        Get family by ID.

        for_update=True takes an exclusive row lock held until the
        transaction ends (SELECT ... FOR UPDATE).
        """
        pass

    @abstractmethod
    async def get_by_owner_id(
        self, owner_id: UUID, for_update: bool = False
    ) -> Optional[Family]:
        """Get the family owned by an account, optionally locking it"""
        pass

    @abstractmethod
    async def create(self, family: Family) -> Family:
        """
        Create a new family.

        Raises FamilyAlreadyExists when the owner already has one. The
        transaction is unusable afterwards and must be rolled back.
        """
        pass

    @abstractmethod
    async def update(self, family: Family) -> Family:
        """Update existing family"""
        pass

    @abstractmethod
    async def delete(self, family: Family) -> None:
        """Delete the family row (members and invites must already be gone)"""
        pass
