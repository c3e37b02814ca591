from unittest.mock import AsyncMock, MagicMock

import pytest


def _passthrough():
    # Repositories hand back the entity they persisted
    return AsyncMock(side_effect=lambda entity: entity)


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.get_by_ids = AsyncMock(return_value=[])
    uow.accounts.get_ids_with_expired_trial = AsyncMock(return_value=[])
    uow.accounts.update = _passthrough()

    uow.plans = MagicMock()
    uow.plans.get_by_id = AsyncMock(return_value=None)

    uow.families = MagicMock()
    uow.families.get_by_id = AsyncMock(return_value=None)
    uow.families.get_by_owner_id = AsyncMock(return_value=None)
    uow.families.create = _passthrough()
    uow.families.update = _passthrough()
    uow.families.delete = AsyncMock()

    uow.members = MagicMock()
    uow.members.get_by_id = AsyncMock(return_value=None)
    uow.members.get_by_account_id = AsyncMock(return_value=None)
    uow.members.count_by_family = AsyncMock(return_value=0)
    uow.members.list_by_family = AsyncMock(return_value=[])
    uow.members.list_newest_first = AsyncMock(return_value=[])
    uow.members.create = _passthrough()
    uow.members.delete = AsyncMock()
    uow.members.delete_by_ids = AsyncMock(side_effect=lambda ids: len(ids))
    uow.members.delete_by_family = AsyncMock(return_value=0)

    uow.invites = MagicMock()
    uow.invites.get_by_token = AsyncMock(return_value=None)
    uow.invites.count_pending_by_family = AsyncMock(return_value=0)
    uow.invites.list_pending_by_family = AsyncMock(return_value=[])
    uow.invites.create = _passthrough()
    uow.invites.update = _passthrough()
    uow.invites.revoke_pending_by_family = AsyncMock(return_value=0)
    uow.invites.revoke_by_ids = AsyncMock(side_effect=lambda ids: len(ids))
    uow.invites.expire_pending = AsyncMock(return_value=0)
    uow.invites.delete_by_family = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = _passthrough()

    return uow
