from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError, to_http_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.family import (
    AcceptInviteResponse,
    AcceptInviteUseCase,
    CreateFamilyUseCase,
    CreateInviteUseCase,
    FamilyCreatedResponse,
    FamilyView,
    GetFamilyViewUseCase,
    InviteSummary,
    LeaveFamilyResponse,
    LeaveFamilyUseCase,
    RemoveMemberResponse,
    RemoveMemberUseCase,
    RevokeInviteResponse,
    RevokeInviteUseCase,
)
from src.depends import get_current_account_id, get_unit_of_work

router = APIRouter(prefix="/family", tags=["Family"])


class CreateInviteRequest(BaseModel):
    """
    Create invite HTTP request payload

    Syntax is checked by the use case so every caller gets VALIDATION_ERROR.
    """

    email: str = Field(..., description="Address the seat is offered to")


class AcceptInviteRequest(BaseModel):
    token: str = Field(..., description="Invite token")


@router.get("", status_code=status.HTTP_200_OK, response_model=FamilyView)
async def get_family(
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Family

    Returns the family the caller owns and/or the one they belong to.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: Unknown account
    """
    use_case = GetFamilyViewUseCase(uow)
    result = await use_case.execute(account_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=FamilyCreatedResponse)
async def create_family(
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Family

    Raises:
        - 403 Forbidden: PLAN_NO_FAMILY
        - 409 Conflict: ALREADY_OWNER, ALREADY_MEMBER
    """
    use_case = CreateFamilyUseCase(uow)
    result = await use_case.execute(account_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/invites",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteSummary,
)
async def create_invite(
    request: CreateInviteRequest,
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Invite

    Offers one seat of the caller's family; creates the family on first use.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, CAPACITY_EXCEEDED
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: PLAN_NO_FAMILY
    """
    use_case = CreateInviteUseCase(
        uow,
        invite_ttl_days=ApplicationConfig.INVITE_TTL_DAYS,
        max_pending_invites=ApplicationConfig.MAX_PENDING_INVITES,
    )
    result = await use_case.execute(account_id, request.email)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.delete(
    "/invites/{token}",
    status_code=status.HTTP_200_OK,
    response_model=RevokeInviteResponse,
)
async def revoke_invite(
    token: str,
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Invite

    Idempotent: an invite that is no longer pending is returned unchanged.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (malformed token)
        - 403 Forbidden: invite belongs to another family
        - 404 Not Found: unknown token
    """
    use_case = RevokeInviteUseCase(uow)
    result = await use_case.execute(account_id, token)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post(
    "/invites/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInviteResponse,
)
async def accept_invite(
    request: AcceptInviteRequest,
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Invite

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, ALREADY_USED_OR_EXPIRED,
                           CAPACITY_EXCEEDED
        - 403 Forbidden: WRONG_EMAIL
        - 404 Not Found: unknown token
        - 409 Conflict: HAS_ACTIVE_PLAN, ALREADY_MEMBER
        - 503 Service Unavailable: TRANSIENT_CONFLICT (retryable)
    """
    use_case = AcceptInviteUseCase(uow)
    result = await use_case.execute(account_id, request.token)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.delete(
    "/members/{member_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveMemberResponse,
)
async def remove_member(
    member_id: str,
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    Raises:
        - 400 Bad Request: Invalid member_id format
        - 403 Forbidden: caller owns no family
        - 404 Not Found: member not in the caller's family
    """
    try:
        member_uuid = UUID(member_id)
    except ValueError:
        raise ClientError(
            Error("VALIDATION_ERROR", "Invalid member ID format"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    use_case = RemoveMemberUseCase(uow)
    result = await use_case.execute(account_id, member_uuid)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.post("/leave", status_code=status.HTTP_200_OK, response_model=LeaveFamilyResponse)
async def leave_family(
    account_id: UUID = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Leave Family

    Raises:
        - 404 Not Found: caller is not a member
    """
    use_case = LeaveFamilyUseCase(uow)
    result = await use_case.execute(account_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
