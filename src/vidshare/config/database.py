"""
Engine and session lifecycle for the vidshare database.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from vidshare.config.settings import Settings, settings as default_settings
from vidshare.db.models import Base


class DatabaseManager:
    """Lazily built engine plus a transactional session generator.

    The application factory creates one manager and stores it on
    ``app.state``; the CLI builds its own for table management.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def _engine_options(self) -> dict[str, Any]:
        cfg = self.settings
        options: dict[str, Any] = {
            "echo": cfg.debug or cfg.db_log_queries,
            "pool_pre_ping": True,
        }
        if cfg.is_sqlite:
            return options
        options["pool_recycle"] = 3600
        if cfg.is_development_database:
            options.update(pool_size=5, max_overflow=0, pool_timeout=10)
        return options

    def get_engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(
                self.settings.effective_database_url, **self._engine_options()
            )
        return self._engine

    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                self.get_engine(), expire_on_commit=False
            )
        return self._session_factory

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield one session as a unit of work.

        Leaving the generator normally commits; an exception thrown into it
        rolls back and propagates.
        """
        async with self.get_session_factory()() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            await session.commit()

    async def create_tables(self) -> None:
        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def close(self) -> None:
        """Dispose of pooled connections; the next use builds a new engine."""
        engine, self._engine, self._session_factory = self._engine, None, None
        if engine is not None:
            await engine.dispose()
