from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import IAccountRepository
from src.domain.entities import Account


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = (
            select(Account)
            .where(Account.id == account_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, account_ids: List[UUID]) -> List[Account]:
        """Get several accounts at once"""
        if not account_ids:
            return []
        stmt = select(Account).where(Account.id.in_(account_ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_ids_with_expired_trial(self, now: datetime) -> List[UUID]:
        """IDs of accounts holding a plan whose trial ended at or before now"""
        stmt = select(Account.id).where(
            Account.trial_ends_at <= now,
            Account.plan_id.is_not(None),
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


    async def update(self, account: Account) -> Account:
        """Update existing account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account
