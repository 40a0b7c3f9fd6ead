"""Service test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - get_directory_manager overridden with a fresh ResourcesDirectoryManager
    - db_manager patched so the readiness probe sees the test engine
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import sata_api.infrastructure.database as db_module
from sata_api.api.dependencies import get_directory_manager
from sata_api.db.base import Base
from sata_api.infrastructure.database import DatabaseSessionManager, get_db
from sata_api.main import app
from sata_api.models import AnonymousUser, MentalHealthResource
from sata_api.services.resources_directory import ResourcesDirectoryManager


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
def directory_manager():
    return ResourcesDirectoryManager()


@pytest.fixture
async def client(test_engine, test_session_factory, directory_manager):
    """FastAPI test client with DB and directory manager overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_directory_manager] = lambda: directory_manager

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_user(test_db):
    user = AnonymousUser(anonymous_id="anon-7f3a", language="en")
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
async def seed_resource(test_db):
    resource = MentalHealthResource(
        title={"en": "24/7 Crisis Hotline", "zh": "24/7 危機熱線"},
        description={"en": "Immediate support for mental health emergencies"},
        category="crisis",
    )
    test_db.add(resource)
    await test_db.commit()
    await test_db.refresh(resource)
    return resource
