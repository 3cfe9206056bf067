"""Process-wide async engine for the topology store.

The API lifespan and the seed script both call :func:`init_engine` once and
:func:`dispose_engine` on the way out; the repository only ever sees the
session factory.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from servicemap.config.settings import Settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def init_engine(settings: Settings) -> AsyncEngine:
    """Build the engine from ``settings`` and cache a session factory for it."""
    global _engine, _session_factory
    _engine = create_async_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )
    # Loaded rows stay usable after commit.
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        raise RuntimeError("Topology store engine not initialized; call init_engine() first.")
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections and forget the cached engine."""
    global _engine, _session_factory
    engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        await engine.dispose()
