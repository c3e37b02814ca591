"""
Admin API Routes - Service Endpoints

Called by the billing integration and the scheduler.
Authentication is via Admin API Key, not user JWTs.
"""

from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import to_http_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.subscription import (
    ApplyPlanChangeUseCase,
    CancelSubscriptionResponse,
    CancelSubscriptionUseCase,
    PlanChangeResponse,
)
from src.app.use_cases.sweeper import (
    ExpireInvitesUseCase,
    ExpireTrialsUseCase,
    SweepResponse,
)
from src.depends import get_unit_of_work, get_unit_of_work_factory

router = APIRouter(prefix="/admin", tags=["Admin"])


class PlanChangeRequest(BaseModel):
    plan_id: UUID = Field(..., description="Plan the account moved to")


class SweepRequest(BaseModel):
    """Optional clock for the sweep; defaults to now"""

    now: Optional[datetime] = None

    def naive_utc(self) -> Optional[datetime]:
        if self.now is None or self.now.tzinfo is None:
            return self.now
        return self.now.astimezone(timezone.utc).replace(tzinfo=None)


@router.post(
    "/accounts/{account_id}/plan",
    status_code=status.HTTP_200_OK,
    response_model=PlanChangeResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def apply_plan_change(
    account_id: UUID,
    request: PlanChangeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Apply Plan Change

    Billing event: the account moved to another plan. The owner's family is
    resized in the same transaction (upgrade, downgrade or dissolution).

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: PLAN_INACTIVE
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: account or plan
    """
    use_case = ApplyPlanChangeUseCase(uow)
    result = await use_case.execute(account_id, request.plan_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/accounts/{account_id}/cancel",
    status_code=status.HTTP_200_OK,
    response_model=CancelSubscriptionResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def cancel_account_subscription(
    account_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel Subscription (billing)

    Safe to deliver more than once.

    Requires: X-Admin-API-Key header
    """
    use_case = CancelSubscriptionUseCase(uow)
    result = await use_case.execute(account_id, initiated_by_user=False)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/sweeps/expired-invites",
    status_code=status.HTTP_200_OK,
    response_model=SweepResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sweep_expired_invites(
    request: Optional[SweepRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Sweep Expired Invites

    Requires: X-Admin-API-Key header
    """
    now = request.naive_utc() if request is not None else None

    use_case = ExpireInvitesUseCase(uow)
    result = await use_case.execute(now)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/sweeps/expired-trials",
    status_code=status.HTTP_200_OK,
    response_model=SweepResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sweep_expired_trials(
    request: Optional[SweepRequest] = None,
    uow_factory: Callable[[], UnitOfWork] = Depends(get_unit_of_work_factory),
):
    """
    Sweep Expired Trials

    Each owner is processed in its own transaction; failures are counted
    and logged, not raised.

    Requires: X-Admin-API-Key header
    """
    now = request.naive_utc() if request is not None else None

    use_case = ExpireTrialsUseCase(uow_factory)
    result = await use_case.execute(now)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
