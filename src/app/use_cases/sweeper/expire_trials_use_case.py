"""
Expire Trials Use Case

Scheduled sweep that ends overdue trials, one owner per transaction.
"""

import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.subscription.family_cascade import FamilyCascade
from src.domain.entities import AuditEvent, PlanTransition

from .dtos import SweepResponse

logger = logging.getLogger(__name__)


class ExpireTrialsUseCase:
    """
    Use case for the trial expiry sweep.

    Business Rules:
    - Accounts with a plan and trial_ends_at <= now lose the plan
    - Their family is dissolved as on cancellation
    - Each owner runs in its own transaction; a failing owner is logged
      and skipped, the rest still run
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self.uow_factory = uow_factory

    async def execute(self, now: Optional[datetime] = None) -> Result[SweepResponse]:
        now = now or datetime.utcnow()

        async with self.uow_factory() as uow:
            account_ids = await uow.accounts.get_ids_with_expired_trial(now)

        expired = 0
        failed = 0
        for account_id in account_ids:
            try:
                if await self._expire_one(account_id, now):
                    expired += 1
            except Exception:
                logger.exception("Trial expiry failed for account %s", account_id)
                failed += 1

        logger.info("Trial sweep at %s: expired=%s failed=%s", now.isoformat(), expired, failed)
        return Return.ok(SweepResponse(expired=expired, failed=failed))

    async def _expire_one(self, account_id: UUID, now: datetime) -> bool:
        async with self.uow_factory() as uow:
            cascade = FamilyCascade(uow)
            family = await cascade.lock_family(account_id)

            # Re-check: the owner may have converted since the listing
            account = await uow.accounts.get_by_id(account_id)
            if (
                account is None
                or account.plan_id is None
                or account.trial_ends_at is None
                or account.trial_ends_at > now
            ):
                return False

            if family is not None:
                outcome = await cascade.dissolve(family, PlanTransition.trial_expiry)
            else:
                outcome = None

            account.clear_plan()
            await uow.accounts.update(account)

            audit = AuditEvent(
                family_id=family.id if family is not None else None,
                account_id=account_id,
                action="trial_expired",
                event_metadata=outcome.model_dump() if outcome is not None else None,
            )
            await uow.audit_events.create(audit)

            await uow.commit()
            return True
