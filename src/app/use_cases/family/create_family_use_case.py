"""
Create Family Use Case

Explicitly opens a family for an owner whose plan has seats to share.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.family_repository import FamilyAlreadyExists
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ALREADY_MEMBER, ALREADY_OWNER, FORBIDDEN, NOT_FOUND
from src.domain.seat_ledger import seat_summary

from .dtos import FamilyCreatedResponse
from .family_setup import can_own_family, create_family_for


class CreateFamilyUseCase:
    """
    Use case for creating the caller's family.

    Business Rules:
    - Requires a plan with at least 2 screens
    - An account owns at most one family
    - Members of another family cannot open their own
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, owner_id: UUID) -> Result[FamilyCreatedResponse]:
        async with self.uow:
            owner = await self.uow.accounts.get_by_id(owner_id)
            if owner is None:
                return Return.err(Error(NOT_FOUND, "Account not found"))

            if not can_own_family(owner):
                return Return.err(
                    Error(
                        FORBIDDEN,
                        "Your plan does not include family seats",
                        reason="PLAN_NO_FAMILY",
                    )
                )

            existing = await self.uow.families.get_by_owner_id(owner_id, for_update=True)
            if existing is not None:
                return Return.err(Error(ALREADY_OWNER, "You already have a family"))

            if await self.uow.members.get_by_account_id(owner_id) is not None:
                return Return.err(
                    Error(ALREADY_MEMBER, "You are already a member of a family")
                )

            try:
                family = await create_family_for(self.uow, owner)
            except FamilyAlreadyExists:
                await self.uow.rollback()
                return Return.err(Error(ALREADY_OWNER, "You already have a family"))
            await self.uow.commit()

            return Return.ok(
                FamilyCreatedResponse(
                    id=str(family.id),
                    name=family.name,
                    max_seats=family.max_seats,
                    seats=seat_summary(family.max_seats, 0),
                )
            )
