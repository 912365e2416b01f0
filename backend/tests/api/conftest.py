"""API test fixtures - in-memory SQLite + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with all tables
    - app.state.db holds a DatabaseSessionManager wrapping the test engine,
      exactly what the lifespan would install
    - seed() inserts rows directly, bypassing the API
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import freezefit.models  # noqa: F401
from freezefit.db.base import Base
from freezefit.infrastructure.database import DatabaseSessionManager
from freezefit.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
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
async def client(test_engine):
    """FastAPI test client backed by the test engine."""
    original = getattr(app.state, "db", None)
    app.state.db = DatabaseSessionManager.from_engine(test_engine)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.db = original


@pytest.fixture
def seed(test_db):
    """Insert ORM rows and return them refreshed."""
    async def _seed(*rows):
        test_db.add_all(rows)
        await test_db.commit()
        for row in rows:
            await test_db.refresh(row)
        return rows[0] if len(rows) == 1 else rows
    return _seed
