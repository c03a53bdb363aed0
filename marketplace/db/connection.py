from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from marketplace.monitoring import setup_query_monitoring
from marketplace.settings import get_settings


def get_database_url() -> str:
    """Return the async database URL the application should connect to.

    Normalization (``postgres://`` upgrades, SQLite fallback) lives in
    :class:`marketplace.settings.AppSettings` so every caller observes the
    same rules and the same error message for malformed URLs.
    """

    return get_settings().resolved_database_url


def get_database_type() -> str:
    """Return ``postgresql`` or ``sqlite`` for the configured URL."""

    return get_settings().database_type


def create_engine() -> AsyncEngine:
    """Create the async SQLAlchemy engine for the configured database.

    PostgreSQL engines keep a warm connection pool and slow-query logging.
    SQLite engines (local development, tests) use SQLAlchemy's defaults.
    """

    settings = get_settings()
    url = settings.resolved_database_url

    if settings.database_type == "sqlite":
        return create_async_engine(url, future=True, echo=False)

    engine = create_async_engine(
        url,
        future=True,
        echo=False,
        pool_size=10,  # Maintain 10 warm connections
        max_overflow=20,  # Allow up to 30 total connections
        pool_pre_ping=True,  # Validate connections before use
        pool_recycle=1800,  # Recycle connections every 30 min
        pool_timeout=30,  # Timeout for getting connection from pool
    )

    setup_query_monitoring(engine, slow_query_threshold=settings.slow_query_threshold)

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


# Global engine/session instances for FastAPI dependency injection
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global engine instance."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Lazily create a session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency to provide database session.

    Commits once the handler returns, rolls back if it raised.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    """Close pooled connections held by the global engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
