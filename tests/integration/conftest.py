from datetime import datetime
from typing import Optional

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work, get_unit_of_work_factory
from src.domain.entities import Account, Plan
from tests.fixtures.json_loader import SeedData


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_session):
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    def override_get_unit_of_work_factory():
        return lambda: SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_unit_of_work_factory] = override_get_unit_of_work_factory
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def plans(db_session):
    """Seeded plan catalog keyed by plan key"""
    seeded = {}
    for row in SeedData.get_copy("plans"):
        key = row.pop("key")
        seeded[key] = Plan(**row)
        db_session.add(seeded[key])
    await db_session.commit()
    return seeded


@pytest_asyncio.fixture
async def make_account(db_session, plans):
    async def _make(
        email: str,
        plan: Optional[str] = None,
        name: Optional[str] = None,
        trial_ends_at: Optional[datetime] = None,
    ) -> Account:
        account = Account(
            email=email,
            name=name,
            plan_id=plans[plan].id if plan else None,
            max_screens=plans[plan].screens if plan else 1,
            trial_ends_at=trial_ends_at,
        )
        db_session.add(account)
        await db_session.commit()
        return account

    return _make

