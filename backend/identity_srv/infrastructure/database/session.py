"""Async engine and request-scoped sessions for the identity database."""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from identity_srv.config import Settings, get_settings

logger = logging.getLogger(__name__)


def _get_async_url(url: str) -> str:
    """Point plain ``sqlite`` / ``postgresql`` URLs at their async drivers."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _engine_options(url: str, settings: Settings) -> dict[str, Any]:
    # SQL echo follows the sql log category; pooled servers get a liveness check.
    options: dict[str, Any] = {"echo": settings.log_level_sql.upper() == "DEBUG"}
    if not url.startswith("sqlite"):
        options["pool_pre_ping"] = True
    return options


settings = get_settings()
_async_url = _get_async_url(settings.database_url)

engine = create_async_engine(_async_url, **_engine_options(_async_url, settings))

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed when the handler succeeds."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.debug("Rolling back request session")
            await session.rollback()
            raise
