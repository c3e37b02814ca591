"""
Apply Plan Change Use Case

Entry point for the billing integration when an account's plan changes.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.domain.errors import NOT_FOUND, VALIDATION_ERROR

from .dtos import CascadeOutcome, PlanChangeResponse
from .family_cascade import FamilyCascade, classify

logger = logging.getLogger(__name__)


class ApplyPlanChangeUseCase:
    """
    Use case for moving an account to a new plan.

    Business Rules:
    - The owner's family row is locked before anything is written
    - plan_id and max_screens follow the plan; a running trial ends
    - The family follows the new capacity in the same transaction
    - Re-applying the current plan changes nothing
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, plan_id: UUID) -> Result[PlanChangeResponse]:
        """
        Execute apply plan change use case.

        Args:
            account_id: Account whose plan changed
            plan_id: New plan

        Returns:
            Result with PlanChangeResponse DTO, or Error
        """
        async with self.uow:
            cascade = FamilyCascade(self.uow)
            family = await cascade.lock_family(account_id)

            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(NOT_FOUND, "Account not found"))

            plan = await self.uow.plans.get_by_id(plan_id)
            if plan is None:
                return Return.err(Error(NOT_FOUND, "Plan not found"))

            if not plan.active:
                return Return.err(
                    Error(VALIDATION_ERROR, "Plan is not available", reason="PLAN_INACTIVE")
                )

            previous_seats = family.max_seats if family is not None else account.max_screens
            transition = classify(previous_seats, plan.screens)

            account.plan_id = plan.id
            account.max_screens = plan.screens
            account.trial_ends_at = None
            await self.uow.accounts.update(account)

            if family is not None:
                outcome = await cascade.resize(family, plan.screens, transition)
            else:
                outcome = CascadeOutcome(transition=transition.value)

            audit = AuditEvent(
                family_id=family.id if family is not None else None,
                account_id=account_id,
                action="plan_changed",
                event_metadata={
                    "plan_id": str(plan.id),
                    "previous_seats": previous_seats,
                    "new_seats": plan.screens,
                    **outcome.model_dump(),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(
                "Plan %s applied to account %s (%s)", plan.id, account_id, transition.value
            )

            return Return.ok(
                PlanChangeResponse(
                    account_id=str(account_id),
                    plan_id=str(plan.id),
                    max_screens=account.max_screens,
                    outcome=outcome,
                )
            )
