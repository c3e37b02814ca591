from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, account_ids: List[UUID]) -> List[Account]:
        """Get several accounts at once"""
        pass

    @abstractmethod
    async def get_ids_with_expired_trial(self, now: datetime) -> List[UUID]:
        """IDs of accounts holding a plan whose trial ended at or before now"""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        pass
