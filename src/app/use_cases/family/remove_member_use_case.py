"""
Remove Member Use Case

Owner frees one seat by removing a member.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.domain.errors import FORBIDDEN, NOT_FOUND

from .dtos import RemoveMemberResponse


class RemoveMemberUseCase:
    """
    Use case for removing a member from the caller's family.

    Business Rules:
    - Only the family owner can remove members
    - The member must belong to the caller's family
    - Runs under the family row lock
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, owner_id: UUID, member_id: UUID) -> Result[RemoveMemberResponse]:
        async with self.uow:
            family = await self.uow.families.get_by_owner_id(owner_id, for_update=True)
            if family is None:
                return Return.err(
                    Error(FORBIDDEN, "You do not own a family", reason="NOT_OWNER")
                )

            member = await self.uow.members.get_by_id(member_id)
            if member is None or member.family_id != family.id:
                return Return.err(Error(NOT_FOUND, "Member not found"))

            await self.uow.members.delete(member)

            audit = AuditEvent(
                family_id=family.id,
                account_id=owner_id,
                action="member_removed",
                event_metadata={"member_id": str(member_id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(RemoveMemberResponse(member_id=str(member_id), status="removed"))
