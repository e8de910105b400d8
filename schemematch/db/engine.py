"""Async database engine, session factory, and lifespan management.

Uses SQLAlchemy 2.0 async with the asyncpg driver for PostgreSQL. Only built
when the SQL store backend is selected.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from schemematch.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and its session factory."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.engine: AsyncEngine = create_async_engine(
            settings.db.database_url,
            echo=settings.log_level == "DEBUG",
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield an async DB session, committing on success.

        Everything a request writes, such as a user's full recommendation
        replace, commits together or not at all.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def init(self) -> None:
        """Verify connectivity; outside production also create missing tables."""
        async with self.engine.begin() as conn:
            # Import here to ensure all models are registered with Base.metadata
            from schemematch.models import Base

            if not self.settings.is_production:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized")

    async def close(self) -> None:
        await self.engine.dispose()

