"""Health check endpoint: service identity plus database reachability."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from identity_srv.config import get_settings
from identity_srv.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    response: Response, session: AsyncSession = Depends(get_db_session)
) -> dict:
    """Report ``healthy`` when the database answers, ``degraded`` (503) otherwise."""
    settings = get_settings()
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        await session.rollback()
        database = "unavailable"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if database == "ok" else "degraded",
        "service": settings.app_title,
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": database,
    }
