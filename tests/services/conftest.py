"""Service test fixtures — async DB, repositories and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe sees the test engine
    - TripStop (tests/services/factories.py) is registered on Base.metadata
      before create_all, so parks have a dependent table in every test DB

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so every
      session sees the same database
    - Unique constraints and FK enforcement behave like PostgreSQL for the
      cases exercised here
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

import backoffice.models  # noqa: F401
import tests.services.factories  # noqa: F401
from backoffice.db.base import Base
from backoffice.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
import backoffice.infrastructure.database as db_module
from backoffice.main import app
from backoffice.services.airports_repository import AirportsRepository
from backoffice.services.parks_repository import ParksRepository


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
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
def parks_repo(test_db):
    return ParksRepository(test_db)


@pytest.fixture
def airports_repo(test_db):
    return AirportsRepository(test_db)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Readiness probe uses db_manager directly
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
