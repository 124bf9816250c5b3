"""Service test fixtures — async in-memory DB, seeded users and a fake message sender.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - FakeSender records calls and can be told to fail either round trip

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for service tests
      (PostgreSQL-specific features are not exercised here)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from campuspool.db.base import Base
from campuspool.models import Profile, User
from tests.services.fakes import FakeSender


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_users(test_db):
    """Three accounts: ada (with a driver profile), ben (no profile), cy."""
    ada = User(email="ada@school.edu", password_hash="x", name="Ada Account")
    ben = User(email="ben@school.edu", password_hash="x", name="Ben")
    cy = User(email="cy@school.edu", password_hash="x", name="Cy")
    test_db.add_all([ada, ben, cy])
    await test_db.flush()
    test_db.add(Profile(
        user_id=ada.id, name="Ada Profile", college="State U",
        has_car=True, car_model="Civic", car_color="Blue", car_capacity=4,
    ))
    await test_db.commit()
    return {"ada": ada, "ben": ben, "cy": cy}


@pytest.fixture
def fake_sender():
    return FakeSender()
