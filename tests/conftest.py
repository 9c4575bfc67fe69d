"""Pytest configuration and fixtures for tasktrack.

Uses app.main:app for HTTP tests. Repository tests run against an
in-memory SQLite database (aiosqlite) built from the ORM metadata; tests
that need Postgres features (enum types, RLS) are marked requires_db and
use pg_session, which skips when DATABASE_URL is not set.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-jwt-secret-for-tasktrack-tests")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.core.request_context import set_user_id
from app.infrastructure.persistence import database, models  # noqa: F401
from app.infrastructure.persistence.database import Base
from app.infrastructure.security.jwt import create_access_token
from app.main import app

get_settings.cache_clear()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def _reset_overrides_and_user():
    """Clear dependency overrides and the request user between tests."""
    yield
    app.dependency_overrides.clear()
    set_user_id(None)


@pytest.fixture
def make_token():
    """Return a builder for signed bearer tokens: make_token(user_id, **user_metadata)."""

    def _make(user_id: str = "user-1", **metadata) -> str:
        return create_access_token({"sub": user_id, "user_metadata": metadata})

    return _make


@pytest.fixture
def auth_headers(make_token) -> dict[str, str]:
    """Authorization header for a member with department Sales."""
    return {"Authorization": f"Bearer {make_token(department='Sales')}"}


@pytest.fixture
async def db_session() -> AsyncSession:
    """Session on a fresh in-memory SQLite database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session
        await session.rollback()
    await engine.dispose()


@pytest.fixture
async def pg_session() -> AsyncSession:
    """Postgres session (migrated schema). Rolls back after test.

    Skips when DATABASE_URL is not configured. Mark tests that use it with
    @pytest.mark.requires_db; run without Postgres via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
