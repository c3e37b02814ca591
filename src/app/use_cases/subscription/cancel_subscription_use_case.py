"""
Cancel Subscription Use Case

Ends an account's plan and dissolves the family it owns.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PlanTransition
from src.domain.errors import FORBIDDEN, NOT_FOUND, VALIDATION_ERROR

from .dtos import CancelSubscriptionResponse, CascadeOutcome
from .family_cascade import FamilyCascade

logger = logging.getLogger(__name__)

TRANSITION = PlanTransition.cancellation.value


class CancelSubscriptionUseCase:
    """
    Use case for cancelling a subscription.

    Business Rules:
    - Family members have no subscription of their own to cancel
    - User cancellation requires a plan (NO_ACTIVE_SUBSCRIPTION otherwise)
    - Billing cancellations are accepted repeatedly and change nothing
      the second time
    - Family, members and invites deleted; plan cleared, 1 screen left
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, account_id: UUID, initiated_by_user: bool = True
    ) -> Result[CancelSubscriptionResponse]:
        async with self.uow:
            cascade = FamilyCascade(self.uow)
            family = await cascade.lock_family(account_id)

            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(NOT_FOUND, "Account not found"))

            if initiated_by_user:
                if await self.uow.members.get_by_account_id(account_id) is not None:
                    return Return.err(
                        Error(
                            FORBIDDEN,
                            "Family members cannot cancel the owner's subscription",
                            reason="FAMILY_MEMBER",
                        )
                    )

                if account.plan_id is None:
                    return Return.err(
                        Error(
                            VALIDATION_ERROR,
                            "There is no active subscription to cancel",
                            reason="NO_ACTIVE_SUBSCRIPTION",
                        )
                    )

            if family is None and account.plan_id is None and account.trial_ends_at is None:
                return Return.ok(self._response(account, CascadeOutcome(transition=TRANSITION)))

            if family is not None:
                outcome = await cascade.dissolve(family, PlanTransition.cancellation)
            else:
                outcome = CascadeOutcome(transition=TRANSITION)

            account.clear_plan()
            await self.uow.accounts.update(account)

            audit = AuditEvent(
                family_id=family.id if family is not None else None,
                account_id=account_id,
                action="subscription_cancelled",
                event_metadata={
                    "initiated_by_user": initiated_by_user,
                    **outcome.model_dump(),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info("Subscription cancelled for account %s", account_id)

            return Return.ok(self._response(account, outcome))

    @staticmethod
    def _response(account, outcome: CascadeOutcome) -> CancelSubscriptionResponse:
        return CancelSubscriptionResponse(
            account_id=str(account.id),
            plan_id=None,
            max_screens=account.max_screens,
            outcome=outcome,
        )
