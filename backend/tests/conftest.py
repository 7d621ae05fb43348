"""Root conftest - in-memory database, ASGI test client and seed helpers.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test session factory
    - app.state.db_manager points at the test engine (readiness check)
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import exercise_tracker.models  # noqa: E402,F401
from exercise_tracker.db.base import Base  # noqa: E402
from exercise_tracker.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, get_db,
)
from exercise_tracker.infrastructure.store import SqlAlchemyExerciseStore  # noqa: E402
from exercise_tracker.main import app  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
async def store(test_db):
    return SqlAlchemyExerciseStore(test_db)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = app.state.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager


@pytest.fixture
def create_user(client):
    """Register a user through the API and return the JSON body."""
    async def _create(username: str = "alice") -> dict:
        res = await client.post(
            "/api/exercise/new-user", json={"username": username},
        )
        assert res.status_code == 200, res.text
        return res.json()
    return _create


@pytest.fixture
def add_exercise(client):
    """Log an exercise through the API and return the response."""
    async def _add(user_id: str, **fields):
        body = {"userId": user_id, "description": "run", "duration": 30}
        body.update(fields)
        return await client.post("/api/exercise/add", json=body)
    return _add
