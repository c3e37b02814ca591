from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.family_invite_repository import IFamilyInviteRepository
from src.app.repositories.family_member_repository import IFamilyMemberRepository
from src.app.repositories.family_repository import IFamilyRepository
from src.app.repositories.plan_repository import IPlanRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    accounts: IAccountRepository
    plans: IPlanRepository
    families: IFamilyRepository
    members: IFamilyMemberRepository
    invites: IFamilyInviteRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
