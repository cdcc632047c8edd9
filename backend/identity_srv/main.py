"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from identity_srv.config import get_settings
from identity_srv.infrastructure.database import Base, engine
from identity_srv.infrastructure.logging.log_config import setup_logging
from identity_srv.infrastructure.middleware.trace import TraceContextMiddleware
from identity_srv.presentation.api.error_handlers import register_error_handlers
from identity_srv.presentation.api.v1.router import router as v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and create tables."""
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-request-id"],
    )
    app.add_middleware(TraceContextMiddleware)

    register_error_handlers(app)

    app.include_router(v1_router, prefix="/api")

    # Bound logos are served straight from the upload directory
    Path(settings.logo_upload_dir).mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.logo_public_base_url,
        StaticFiles(directory=settings.logo_upload_dir),
        name="logos",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "identity_srv.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
