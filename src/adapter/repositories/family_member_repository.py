from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.family_member_repository import IFamilyMemberRepository
from src.domain.entities import FamilyMember


class FamilyMemberRepository(IFamilyMemberRepository):
    """FamilyMember repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, member_id: UUID) -> Optional[FamilyMember]:
        """Get member by ID"""
        stmt = select(FamilyMember).where(FamilyMember.id == member_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_account_id(self, account_id: UUID) -> Optional[FamilyMember]:
        """Get the membership of an account, if any"""
        stmt = select(FamilyMember).where(FamilyMember.account_id == account_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_by_family(self, family_id: UUID) -> int:
        """Number of occupied seats, owner excluded"""
        stmt = (
            select(func.count())
            .select_from(FamilyMember)
            .where(FamilyMember.family_id == family_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_by_family(self, family_id: UUID) -> List[FamilyMember]:
        """Members ordered by joined_at ascending"""
        stmt = (
            select(FamilyMember)
            .where(FamilyMember.family_id == family_id)
            .order_by(FamilyMember.joined_at.asc(), FamilyMember.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_newest_first(self, family_id: UUID) -> List[FamilyMember]:
        """Members ordered by joined_at descending, ties broken by id descending"""
        stmt = (
            select(FamilyMember)
            .where(FamilyMember.family_id == family_id)
            .order_by(FamilyMember.joined_at.desc(), FamilyMember.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, member: FamilyMember) -> FamilyMember:
        """Create a new member"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def delete(self, member: FamilyMember) -> None:
        """Delete one member"""
        await self.session.delete(member)
        await self.session.flush()

    async def delete_by_ids(self, member_ids: List[UUID]) -> int:
        """Delete the given members"""
        if not member_ids:
            return 0
        stmt = delete(FamilyMember).where(FamilyMember.id.in_(member_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_family(self, family_id: UUID) -> int:
        """Delete every member of a family"""
        stmt = delete(FamilyMember).where(FamilyMember.family_id == family_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
