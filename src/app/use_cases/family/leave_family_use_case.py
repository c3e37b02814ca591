"""
Leave Family Use Case

A member gives their own seat back.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.domain.errors import NOT_FOUND

from .dtos import LeaveFamilyResponse


class LeaveFamilyUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[LeaveFamilyResponse]:
        async with self.uow:
            membership = await self.uow.members.get_by_account_id(account_id)
            if membership is None:
                return Return.err(
                    Error(NOT_FOUND, "You are not a member of a family", reason="NOT_A_MEMBER")
                )

            family = await self.uow.families.get_by_id(membership.family_id, for_update=True)

            # The owner may have removed us while we waited for the lock
            membership = await self.uow.members.get_by_account_id(account_id)
            if family is None or membership is None:
                return Return.err(
                    Error(NOT_FOUND, "You are not a member of a family", reason="NOT_A_MEMBER")
                )

            await self.uow.members.delete(membership)

            audit = AuditEvent(
                family_id=family.id,
                account_id=account_id,
                action="member_left",
                event_metadata={"member_id": str(membership.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(LeaveFamilyResponse(status="left"))
