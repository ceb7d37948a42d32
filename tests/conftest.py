"""Shared pytest fixtures for all test suites."""

import uuid
from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from backend.travel.api.deps import Repositories, get_llm, get_repositories, memory_repositories
from backend.travel.db.context import RequestContext
from backend.travel.db.engine import create_session_factory
from backend.travel.db.models import Base
from backend.travel.llm.client import DeterministicStubClient
from backend.travel.main import app


@pytest.fixture
def ctx() -> RequestContext:
    return RequestContext(user_id=uuid.uuid4())


@pytest.fixture
def other_ctx() -> RequestContext:
    return RequestContext(user_id=uuid.uuid4())


@pytest.fixture
def repos() -> Repositories:
    """Fresh in-memory repositories."""
    return memory_repositories()


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with all tables created.

    StaticPool keeps the single in-memory database alive across sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def sql_session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session on the in-memory SQLite database."""
    async with create_session_factory(sqlite_engine)() as session:
        yield session


@pytest.fixture
def client(repos: Repositories) -> Generator[TestClient, None, None]:
    """Test client backed by in-memory repositories and the stub model."""

    async def override_get_repositories() -> AsyncGenerator[Repositories, None]:
        yield repos

    app.dependency_overrides[get_repositories] = override_get_repositories
    app.dependency_overrides[get_llm] = DeterministicStubClient

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(ctx: RequestContext) -> dict[str, str]:
    return {"Authorization": f"Bearer {ctx.user_id}"}
