from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.error import to_http_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.subscription import (
    CancelSubscriptionResponse,
    CancelSubscriptionUseCase,
)
from src.depends import get_current_account_id, get_unit_of_work

router = APIRouter(prefix="/subscription", tags=["Subscription"])


@router.post(
    "/cancel",
    status_code=status.HTTP_200_OK,
    response_model=CancelSubscriptionResponse,
)
async def cancel_subscription(
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel Subscription

    Ends the caller's plan and dissolves their family (members and invites
    included).

    Raises:
        - 400 Bad Request: NO_ACTIVE_SUBSCRIPTION
        - 403 Forbidden: caller is a family member
    """
    use_case = CancelSubscriptionUseCase(uow)
    result = await use_case.execute(account_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
