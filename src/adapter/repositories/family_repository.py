from typing import Optional
from uuid import UUID

from sqlalchemy import text, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.family_repository import FamilyAlreadyExists, IFamilyRepository
from src.domain.entities import Family


class FamilyRepository(IFamilyRepository):
    """Family repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession, lock_timeout_ms: Optional[int] = None):
        self.session = session
        self.lock_timeout_ms = lock_timeout_ms

    async def get_by_id(self, family_id: UUID, for_update: bool = False) -> Optional[Family]:
        """Get family by ID, optionally taking the row lock"""
        return await self._get_one(Family.id == family_id, for_update)

    async def get_by_owner_id(
        self, owner_id: UUID, for_update: bool = False
    ) -> Optional[Family]:
        """Get the family owned by an account, optionally taking the row lock"""
        return await self._get_one(Family.owner_id == owner_id, for_update)

    async def create(self, family: Family) -> Family:
        """Create a new family, one per owner"""
        self.session.add(family)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise FamilyAlreadyExists(family.owner_id) from exc
        await self.session.refresh(family)
        return family

    async def update(self, family: Family) -> Family:
        """Update existing family"""
        self.session.add(family)
        await self.session.flush()
        await self.session.refresh(family)
        return family

    async def delete(self, family: Family) -> None:
        """Delete the family row"""
        await self.session.delete(family)
        await self.session.flush()

    async def _get_one(self, criterion, for_update: bool) -> Optional[Family]:
        stmt = select(Family).where(criterion)
        if for_update:
            await self._lock(criterion)
            # Re-read columns even if the object is already in the identity map
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _lock(self, criterion) -> None:
        if self.session.get_bind().dialect.name == "postgresql":
            if self.lock_timeout_ms:
                await self.session.execute(
                    text(f"SET LOCAL lock_timeout = {int(self.lock_timeout_ms)}")
                )
            return

        # SQLite ignores FOR UPDATE and defers BEGIN to the first write, so
        # take the database write lock with a no-op write. It is held until
        # commit or rollback, even when no family row matches yet.
        await self.session.execute(
            update(Family)
            .where(criterion)
            .values(max_seats=Family.max_seats)
            .execution_options(synchronize_session=False)
        )
