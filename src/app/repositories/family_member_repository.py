from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import FamilyMember


class IFamilyMemberRepository(ABC):
    """FamilyMember repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, member_id: UUID) -> Optional[FamilyMember]:
        """Get member by ID"""
        pass

    @abstractmethod
    async def get_by_account_id(self, account_id: UUID) -> Optional[FamilyMember]:
        """Get the membership of an account, if any"""
        pass

    @abstractmethod
    async def count_by_family(self, family_id: UUID) -> int:
        """Number of occupied seats, owner excluded"""
        pass

    @abstractmethod
    async def list_by_family(self, family_id: UUID) -> List[FamilyMember]:
        """Members ordered by joined_at ascending"""
        pass

    @abstractmethod
    async def list_newest_first(self, family_id: UUID) -> List[FamilyMember]:
        """Members ordered by joined_at descending, ties broken by id descending"""
        pass

    @abstractmethod
    async def create(self, member: FamilyMember) -> FamilyMember:
        """Create a new member"""
        pass

    @abstractmethod
    async def delete(self, member: FamilyMember) -> None:
        """Delete one member"""
        pass

    @abstractmethod
    async def delete_by_ids(self, member_ids: List[UUID]) -> int:
        """Delete the given members, returns rows deleted"""
        pass

    @abstractmethod
    async def delete_by_family(self, family_id: UUID) -> int:
        """Delete every member of a family, returns rows deleted"""
        pass
