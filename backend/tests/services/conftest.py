"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - db_manager patched so readiness probes see the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; FOR UPDATE is a no-op there,
      which is fine because tests run one request at a time
    - make_tree builds hierarchies through CategoryService so fixtures obey the
      same ancestry rules as production writes
"""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from category_tree.db.base import Base
from category_tree.infrastructure.database import get_db, DatabaseSessionManager
from category_tree.models.category import Category
from category_tree.services.category_service import CategoryService
import category_tree.infrastructure.database as db_module
from category_tree.main import app


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
def service(test_db):
    return CategoryService(test_db)


@pytest.fixture
def fresh_rows(test_session_factory):
    """Read every category through a new session (bypasses the identity map)."""
    async def _read() -> dict:
        async with test_session_factory() as session:
            result = await session.execute(select(Category))
            return {c.id: c for c in result.scalars().all()}
    return _read


@pytest.fixture
def make_tree(service):
    """Build a hierarchy from nested dicts: {"Root": {"Child": {}}}.

    Returns a dict name -> Category. Names must be unique within one call.
    """
    async def _make(spec: dict, parent_id=None, created=None) -> dict:
        created = {} if created is None else created
        for name, children in spec.items():
            category = await service.create_category(name, parent_id)
            created[name] = category
            await _make(children, category.id, created)
        return created
    return _make


@pytest.fixture
async def client(test_engine, test_session_factory):
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

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
