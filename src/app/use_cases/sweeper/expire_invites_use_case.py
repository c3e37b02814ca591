"""
Expire Invites Use Case

Scheduled sweep that moves every overdue pending invite to expired.
"""

import logging
from datetime import datetime
from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import SweepResponse

logger = logging.getLogger(__name__)


class ExpireInvitesUseCase:
    """
    Use case for the invite expiry sweep.

    Business Rules:
    - One set-based update, no row locks
    - Only pending invites with expires_at <= now are touched
    - Running again with the same now expires nothing
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> Result[SweepResponse]:
        now = now or datetime.utcnow()

        async with self.uow:
            expired = await self.uow.invites.expire_pending(now)
            await self.uow.commit()

        logger.info("Invite sweep at %s expired %s invite(s)", now.isoformat(), expired)
        return Return.ok(SweepResponse(expired=expired))
