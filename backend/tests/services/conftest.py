"""Service test fixtures: async DB, FastAPI test client, recording notifier.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for code that bypasses get_db (readiness probe)
    - app.state.notifier replaced by a recorder; nothing is mailed

Design Decisions:
    - SQLite in-memory: fast, no external dependency; ON CONFLICT and RETURNING
      behave as on PostgreSQL for the statements used here
    - The client's cookie jar is cleared after login so each request states its
      credentials explicitly
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models.category import Category
import app.infrastructure.database as db_module
import app.models  # noqa: F401
from app.main import app
from tests.services.ledger_client import RecordingNotifier, signed_in_headers


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
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def client(test_engine, test_session_factory, notifier):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    original_notifier = app.state.notifier
    app.state.notifier = notifier

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    app.state.notifier = original_notifier


@pytest.fixture
async def categories(test_db):
    """One income and one expense category."""
    salary = Category(name="Salary", type="INCOME", color="#16a34a", icon="wallet", is_default=True)
    groceries = Category(name="Groceries", type="EXPENSE", color="#dc2626", icon="cart", is_default=True)
    test_db.add_all([salary, groceries])
    await test_db.commit()
    return {"income": salary, "expense": groceries}


@pytest.fixture
async def auth_headers(client, notifier):
    return await signed_in_headers(client, notifier, "a@x.com")
