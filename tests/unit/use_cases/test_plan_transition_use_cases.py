from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.subscription import (
    ApplyPlanChangeUseCase,
    CancelSubscriptionUseCase,
    FamilyCascade,
)
from src.domain.entities import Plan, PlanTransition
from tests.unit.factories import NOW, make_account, make_family, make_invite, make_member


def _members(family_id, count):
    # Oldest first; list_newest_first hands them back reversed
    return [
        make_member(family_id, joined_at=NOW + timedelta(minutes=i)) for i in range(count)
    ]


@pytest.mark.asyncio
async def test_downgrade_evicts_newest_members_and_revokes_pending(mock_uow):
    """Family plan of 4 with 3 members moved to Duo"""
    family = make_family(uuid4(), max_seats=4)
    oldest, middle, newest = _members(family.id, 3)
    mock_uow.members.list_newest_first.return_value = [newest, middle, oldest]
    mock_uow.invites.revoke_pending_by_family.return_value = 1

    outcome = await FamilyCascade(mock_uow).resize(family, 2, PlanTransition.downgrade)

    assert family.max_seats == 2
    mock_uow.families.update.assert_called_once_with(family)
    mock_uow.members.delete_by_ids.assert_called_once_with([newest.id, middle.id])
    mock_uow.invites.revoke_pending_by_family.assert_called_once_with(family.id)
    assert outcome.members_evicted == 2
    assert outcome.invites_revoked == 1
    assert outcome.family_deleted is False


@pytest.mark.asyncio
async def test_downgrade_keeps_exactly_fitting_members(mock_uow):
    family = make_family(uuid4(), max_seats=6)
    members = _members(family.id, 3)
    mock_uow.members.list_newest_first.return_value = list(reversed(members))

    outcome = await FamilyCascade(mock_uow).resize(family, 4, PlanTransition.downgrade)

    mock_uow.members.delete_by_ids.assert_not_called()
    mock_uow.invites.revoke_pending_by_family.assert_called_once_with(family.id)
    assert outcome.members_evicted == 0


@pytest.mark.asyncio
async def test_downgrade_with_seats_left_revokes_only_surplus_pending(mock_uow):
    family = make_family(uuid4(), max_seats=6)
    mock_uow.members.list_newest_first.return_value = _members(family.id, 1)
    newest, middle, oldest = [make_invite(family.id) for _ in range(3)]
    mock_uow.invites.list_pending_by_family.return_value = [newest, middle, oldest]

    outcome = await FamilyCascade(mock_uow).resize(family, 4, PlanTransition.downgrade)

    mock_uow.invites.revoke_by_ids.assert_called_once_with([newest.id])
    mock_uow.invites.revoke_pending_by_family.assert_not_called()
    assert outcome.invites_revoked == 1


@pytest.mark.asyncio
async def test_upgrade_only_raises_capacity(mock_uow):
    family = make_family(uuid4(), max_seats=2)

    outcome = await FamilyCascade(mock_uow).resize(family, 4, PlanTransition.upgrade)

    assert family.max_seats == 4
    assert outcome.transition == "upgrade"
    mock_uow.members.list_newest_first.assert_not_called()
    mock_uow.members.delete_by_ids.assert_not_called()
    mock_uow.invites.revoke_pending_by_family.assert_not_called()


@pytest.mark.asyncio
async def test_downgrade_below_two_seats_dissolves_family(mock_uow):
    family = make_family(uuid4(), max_seats=4)

    outcome = await FamilyCascade(mock_uow).resize(family, 1, PlanTransition.downgrade)

    assert outcome.family_deleted is True
    mock_uow.families.delete.assert_called_once_with(family)
    mock_uow.families.update.assert_not_called()


@pytest.mark.asyncio
async def test_dissolve_deletes_invites_then_members_then_family(mock_uow):
    family = make_family(uuid4(), max_seats=4)
    calls = []

    async def delete_invites(family_id):
        calls.append("invites")
        return 2

    async def delete_members(family_id):
        calls.append("members")
        return 3

    async def delete_family(entity):
        calls.append("family")

    mock_uow.invites.delete_by_family.side_effect = delete_invites
    mock_uow.members.delete_by_family.side_effect = delete_members
    mock_uow.families.delete.side_effect = delete_family

    outcome = await FamilyCascade(mock_uow).dissolve(family, PlanTransition.cancellation)

    assert calls == ["invites", "members", "family"]
    assert outcome.members_evicted == 3
    assert outcome.invites_deleted == 2


@pytest.mark.asyncio
async def test_apply_plan_change_downgrade(mock_uow):
    owner = make_account(max_screens=4, trial_ends_at=NOW + timedelta(days=1))
    family = make_family(owner.id, max_seats=4)
    plan = Plan(id=uuid4(), name="Duo", screens=2)
    mock_uow.families.get_by_owner_id.return_value = family
    mock_uow.accounts.get_by_id.return_value = owner
    mock_uow.plans.get_by_id.return_value = plan
    mock_uow.members.list_newest_first.return_value = _members(family.id, 1)

    result = await ApplyPlanChangeUseCase(mock_uow).execute(owner.id, plan.id)

    assert result.is_ok()
    assert result.value.outcome.transition == "downgrade"
    assert result.value.max_screens == 2
    assert owner.plan_id == plan.id
    assert owner.trial_ends_at is None
    assert family.max_seats == 2
    mock_uow.families.get_by_owner_id.assert_called_once_with(owner.id, for_update=True)
    assert mock_uow.audit_events.create.call_args[0][0].action == "plan_changed"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_apply_same_plan_twice_changes_nothing(mock_uow):
    owner = make_account(max_screens=4)
    family = make_family(owner.id, max_seats=4)
    plan = Plan(id=owner.plan_id, name="Family", screens=4)
    mock_uow.families.get_by_owner_id.return_value = family
    mock_uow.accounts.get_by_id.return_value = owner
    mock_uow.plans.get_by_id.return_value = plan

    result = await ApplyPlanChangeUseCase(mock_uow).execute(owner.id, plan.id)

    assert result.value.outcome.transition == "unchanged"
    assert result.value.outcome.members_evicted == 0
    mock_uow.members.delete_by_ids.assert_not_called()
    mock_uow.invites.revoke_pending_by_family.assert_not_called()


@pytest.mark.asyncio
async def test_apply_plan_change_without_family(mock_uow):
    account = make_account(max_screens=1, plan=False)
    plan = Plan(id=uuid4(), name="Family", screens=4)
    mock_uow.accounts.get_by_id.return_value = account
    mock_uow.plans.get_by_id.return_value = plan

    result = await ApplyPlanChangeUseCase(mock_uow).execute(account.id, plan.id)

    assert result.is_ok()
    assert result.value.outcome.transition == "upgrade"
    assert account.max_screens == 4
    mock_uow.families.update.assert_not_called()


@pytest.mark.asyncio
async def test_apply_plan_change_errors(mock_uow):
    account = make_account()
    result = await ApplyPlanChangeUseCase(mock_uow).execute(account.id, uuid4())
    assert result.error.code == "NOT_FOUND"

    mock_uow.accounts.get_by_id.return_value = account
    result = await ApplyPlanChangeUseCase(mock_uow).execute(account.id, uuid4())
    assert result.error.code == "NOT_FOUND"

    mock_uow.plans.get_by_id.return_value = Plan(id=uuid4(), name="Old", screens=2, active=False)
    result = await ApplyPlanChangeUseCase(mock_uow).execute(account.id, uuid4())
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.reason == "PLAN_INACTIVE"

    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_cancel_subscription_dissolves_family(mock_uow):
    owner = make_account(max_screens=4)
    family = make_family(owner.id, max_seats=4)
    mock_uow.families.get_by_owner_id.return_value = family
    mock_uow.accounts.get_by_id.return_value = owner
    mock_uow.members.delete_by_family.return_value = 2
    mock_uow.invites.delete_by_family.return_value = 1

    result = await CancelSubscriptionUseCase(mock_uow).execute(owner.id)

    assert result.is_ok()
    assert result.value.outcome.family_deleted is True
    assert result.value.outcome.members_evicted == 2
    assert result.value.max_screens == 1
    assert owner.plan_id is None
    mock_uow.families.delete.assert_called_once_with(family)
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "subscription_cancelled"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_cancel_subscription_member_forbidden(mock_uow):
    account = make_account(plan=False)
    mock_uow.accounts.get_by_id.return_value = account
    mock_uow.members.get_by_account_id.return_value = make_member(uuid4(), account_id=account.id)

    result = await CancelSubscriptionUseCase(mock_uow).execute(account.id)

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_cancel_subscription_without_plan(mock_uow):
    account = make_account(plan=False)
    mock_uow.accounts.get_by_id.return_value = account

    result = await CancelSubscriptionUseCase(mock_uow).execute(account.id)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.reason == "NO_ACTIVE_SUBSCRIPTION"


@pytest.mark.asyncio
async def test_billing_cancel_repeated_is_noop(mock_uow):
    account = make_account(plan=False)
    mock_uow.accounts.get_by_id.return_value = account

    result = await CancelSubscriptionUseCase(mock_uow).execute(
        account.id, initiated_by_user=False
    )

    assert result.is_ok()
    assert result.value.outcome.family_deleted is False
    mock_uow.audit_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()
