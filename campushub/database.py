"""
CampusHub – Async SQLAlchemy engine, session, and declarative base.

The profile / endorsement store is the only durable state of the service;
every request works through its own ``AsyncSession`` from ``get_db``.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from campushub.config import settings


def build_engine(url: str, **overrides) -> AsyncEngine:
    """Create an async engine with the driver-specific connect args applied."""
    options = {
        "echo": settings.DEBUG,
        "future": True,
    }
    # PgBouncer (transaction mode) does not support prepared statement caching.
    if "postgresql" in url:
        options["connect_args"] = {"statement_cache_size": 0}
    elif url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    options.update(overrides)
    return create_async_engine(url, **options)


# ── Engine ──
engine = build_engine(settings.DATABASE_URL)

# ── Session factory ──
async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create every mapped table that does not exist yet."""
    import campushub.models  # noqa: F401  (registers the mappers)

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ── Dependency for FastAPI routes ──
async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async database session, rolled back if the request fails."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
