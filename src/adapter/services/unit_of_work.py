from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.family_invite_repository import FamilyInviteRepository
from src.adapter.repositories.family_member_repository import FamilyMemberRepository
from src.adapter.repositories.family_repository import FamilyRepository
from src.adapter.repositories.plan_repository import PlanRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession, lock_timeout_ms: Optional[int] = None):
        self.session = session
        self.lock_timeout_ms = lock_timeout_ms

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.accounts = AccountRepository(self.session)
        self.plans = PlanRepository(self.session)
        self.families = FamilyRepository(self.session, self.lock_timeout_ms)
        self.members = FamilyMemberRepository(self.session)
        self.invites = FamilyInviteRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed explicitly is discarded, releasing row locks
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
