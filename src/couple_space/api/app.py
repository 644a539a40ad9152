"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from couple_space.api.captions import router as captions_router
from couple_space.api.couples import router as couples_router
from couple_space.app_logging import configure_logging
from couple_space.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Couple space API starting",
            extra={
                "couple_store": container.settings.couple_store,
                "environment": container.settings.environment,
            },
        )
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close application resources")

    app = FastAPI(title="Couple Space", lifespan=lifespan)
    app.state.container = container

    app.include_router(couples_router)
    app.include_router(captions_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
