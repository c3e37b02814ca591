from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import FamilyInvite


class IFamilyInviteRepository(ABC):
    """FamilyInvite repository interface - application layer"""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[FamilyInvite]:
        """Get invite by token"""
        pass

    @abstractmethod
    async def count_pending_by_family(self, family_id: UUID) -> int:
        """Number of pending invites of a family"""
        pass

    @abstractmethod
    async def list_pending_by_family(
        self, family_id: UUID, now: Optional[datetime] = None
    ) -> List[FamilyInvite]:
        """Pending invites, newest first; with now, only those not yet expired"""
        pass

    @abstractmethod
    async def create(self, invite: FamilyInvite) -> FamilyInvite:
        """Create a new invite"""
        pass

    @abstractmethod
    async def update(self, invite: FamilyInvite) -> FamilyInvite:
        """Update existing invite"""
        pass

    @abstractmethod
    async def revoke_pending_by_family(self, family_id: UUID) -> int:
        """Revoke every pending invite of a family, returns rows changed"""
        pass

    @abstractmethod
    async def revoke_by_ids(self, invite_ids: List[UUID]) -> int:
        """Revoke the given invites if still pending, returns rows changed"""
        pass

    @abstractmethod
    async def expire_pending(self, now: datetime, family_id: Optional[UUID] = None) -> int:
        """Mark pending invites with expires_at <= now as expired, returns rows changed"""
        pass

    @abstractmethod
    async def delete_by_family(self, family_id: UUID) -> int:
        """Delete every invite of a family, returns rows deleted"""
        pass
