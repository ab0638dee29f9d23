"""
Test configuration and fixtures.
Runs the FastAPI app against an in-memory SQLite database through httpx.
"""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import civica.models  # noqa: F401  (registers every table on Base.metadata)
from civica.core.celery_app import celery_app
from civica.db.session import Base, get_db
from civica.main import app

# Push notifications run inline instead of going to the broker.
celery_app.conf.task_always_eager = True


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_maker):
    """Session used by tests to seed data."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def fetch(session_maker):
    """Load a fresh copy of a row, bypassing any session the test holds."""
    async def _fetch(model, obj_id):
        async with session_maker() as session:
            return await session.get(model, obj_id)
    return _fetch


@pytest.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
