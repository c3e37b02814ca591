from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.family_invite_repository import IFamilyInviteRepository
from src.domain.entities import FamilyInvite, InviteStatus


class FamilyInviteRepository(IFamilyInviteRepository):
    """FamilyInvite repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_token(self, token: str) -> Optional[FamilyInvite]:
        """Get invite by token, always re-reading the row"""
        stmt = (
            select(FamilyInvite)
            .where(FamilyInvite.token == token)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_pending_by_family(self, family_id: UUID) -> int:
        """Number of pending invites of a family"""
        stmt = (
            select(func.count())
            .select_from(FamilyInvite)
            .where(
                FamilyInvite.family_id == family_id,
                FamilyInvite.status == InviteStatus.pending,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_pending_by_family(
        self, family_id: UUID, now: Optional[datetime] = None
    ) -> List[FamilyInvite]:
        """Pending invites, newest first"""
        stmt = select(FamilyInvite).where(
            FamilyInvite.family_id == family_id,
            FamilyInvite.status == InviteStatus.pending,
        )
        if now is not None:
            stmt = stmt.where(FamilyInvite.expires_at > now)
        stmt = stmt.order_by(FamilyInvite.created_at.desc(), FamilyInvite.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, invite: FamilyInvite) -> FamilyInvite:
        """Create a new invite"""
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite

    async def update(self, invite: FamilyInvite) -> FamilyInvite:
        """Update existing invite"""
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite

    async def revoke_pending_by_family(self, family_id: UUID) -> int:
        """Revoke every pending invite of a family"""
        stmt = (
            update(FamilyInvite)
            .where(
                FamilyInvite.family_id == family_id,
                FamilyInvite.status == InviteStatus.pending,
            )
            .values(status=InviteStatus.revoked)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke_by_ids(self, invite_ids: List[UUID]) -> int:
        """Revoke the given invites if still pending"""
        if not invite_ids:
            return 0
        stmt = (
            update(FamilyInvite)
            .where(
                FamilyInvite.id.in_(invite_ids),
                FamilyInvite.status == InviteStatus.pending,
            )
            .values(status=InviteStatus.revoked)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def expire_pending(self, now: datetime, family_id: Optional[UUID] = None) -> int:
        """Set-based expiry of pending invites past their deadline"""
        stmt = update(FamilyInvite).where(
            FamilyInvite.status == InviteStatus.pending,
            FamilyInvite.expires_at <= now,
        )
        if family_id is not None:
            stmt = stmt.where(FamilyInvite.family_id == family_id)
        stmt = stmt.values(status=InviteStatus.expired)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_family(self, family_id: UUID) -> int:
        """Delete every invite of a family"""
        stmt = delete(FamilyInvite).where(FamilyInvite.family_id == family_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
