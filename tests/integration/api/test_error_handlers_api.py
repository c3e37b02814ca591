from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work
from src.domain.entities import Family, FamilyMember
from tests.utils.auth import auth_headers


@pytest.mark.asyncio
async def test_overfull_family_is_consistency_fault(
    client: AsyncClient, db_session, make_account
):
    owner = await make_account("ana@example.com", plan="duo", name="Ana")
    bia = await make_account("bia@example.com")
    caio = await make_account("caio@example.com")

    # Two members on a two-seat plan: one more than the seats allow
    family = Family(owner_id=owner.id, name="Ana's family", max_seats=2)
    db_session.add(family)
    await db_session.commit()
    db_session.add_all(
        [
            FamilyMember(family_id=family.id, account_id=bia.id),
            FamilyMember(family_id=family.id, account_id=caio.id),
        ]
    )
    await db_session.commit()

    response = await client.post(
        "/family/invites", json={"email": "dani@example.com"}, headers=auth_headers(owner)
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": {"code": "CONSISTENCY_FAULT", "message": "Internal server error"}
    }


@pytest.mark.asyncio
async def test_lock_failure_is_retryable_conflict(
    app, client: AsyncClient, db_session, make_account
):
    owner = await make_account("ana@example.com", plan="family", name="Ana")
    invitee = await make_account("bia@example.com")
    created = await client.post(
        "/family/invites", json={"email": "bia@example.com"}, headers=auth_headers(owner)
    )
    assert created.status_code == 201

    class LockedFamilyUnitOfWork(SqlAlchemyUnitOfWork):
        async def __aenter__(self):
            await super().__aenter__()
            self.families.get_by_id = AsyncMock(
                side_effect=OperationalError(
                    "SELECT families", {}, Exception("database is locked")
                )
            )
            return self

    async def override_get_unit_of_work():
        yield LockedFamilyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    response = await client.post(
        "/family/invites/accept",
        json={"token": created.json()["token"]},
        headers=auth_headers(invitee),
    )

    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "TRANSIENT_CONFLICT"
    assert error["retryable"] is True
