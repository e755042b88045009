"""
Test configuration for the CampusHub backend.

Every test gets a fresh in-memory SQLite database (one shared connection via
StaticPool). The environment is pinned before ``campushub`` is imported so the
settings singleton picks up the test values.
"""
import os

ADMIN_ID = "9f1c2d3e-0000-4000-8000-00000000a001"

os.environ["SUPER_ADMIN_ID"] = ADMIN_ID
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DEBUG"] = "false"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_AUDIENCE"] = "authenticated"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from campushub.database import build_engine, create_tables, get_db
from campushub.main import app
from campushub.routers.auth import create_access_token
from campushub.services.profile_store import ProfileStore
from campushub.services.roles import AccountRoleManager
from campushub.services.trust import TrustEndorsementEngine


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite://", echo=False, poolclass=StaticPool)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

@pytest.fixture
def admin_id() -> str:
    return ADMIN_ID


@pytest.fixture
def store(db) -> ProfileStore:
    return ProfileStore(db)


@pytest.fixture
def roles(store) -> AccountRoleManager:
    return AccountRoleManager(store, ADMIN_ID)


@pytest.fixture
def trust_engine(store) -> TrustEndorsementEngine:
    return TrustEndorsementEngine(store)


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client(session_factory):
    """Async httpx client using ASGI transport, wired to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    """Build an Authorization header for an actor id."""

    def _headers(actor_id: str, email: str = "", metadata=None) -> dict:
        token = create_access_token(
            actor_id, email or f"{actor_id}@campus.edu", metadata=metadata
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
