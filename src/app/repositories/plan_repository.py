from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Plan


class IPlanRepository(ABC):
    """Plan repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, plan_id: UUID) -> Optional[Plan]:
        """Get plan by ID"""
        pass
