"""Database engine and session factory."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from backend.travel.config import Settings, get_settings
from backend.travel.db.models import Base


def async_database_url(database_url: str) -> str:
    """Normalize a database URL to its async driver.

    Raises:
        ValueError: If the URL is empty.
    """
    if not database_url:
        raise ValueError(
            "DATABASE_URL must be set to a valid connection string. "
            "Please configure the database_url setting."
        )

    # Convert postgresql:// to postgresql+asyncpg://
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def sync_database_url(database_url: str) -> str:
    """Strip async drivers; alembic runs on sync SQLAlchemy."""
    for async_prefix, sync_prefix in (
        ("sqlite+aiosqlite://", "sqlite://"),
        ("postgresql+asyncpg://", "postgresql://"),
    ):
        if database_url.startswith(async_prefix):
            return database_url.replace(async_prefix, sync_prefix, 1)
    return database_url


def create_async_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create async SQLAlchemy engine from settings."""
    return create_async_engine(
        async_database_url(settings.database_url), pool_pre_ping=True, echo=False
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create sessionmaker for creating database sessions.

    Repositories return records built from ORM rows after commit, so rows
    must stay loaded once the transaction ends.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return async_sessionmaker(bind=engine, expire_on_commit=False)


_async_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_async_engine() -> AsyncEngine:
    """Get global async engine instance."""
    global _async_engine
    if _async_engine is None:
        _async_engine = create_async_engine_from_settings(get_settings())
    return _async_engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the global sessionmaker."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_async_engine())
    return _session_factory


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables directly, for local SQLite use without migrations."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

