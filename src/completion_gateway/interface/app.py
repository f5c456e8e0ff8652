"""FastAPI application factory and lifespan."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from completion_gateway.infrastructure.config import get_settings
from completion_gateway.interface.dependencies import build_capability
from completion_gateway.interface.error_handlers import register_error_handlers
from completion_gateway.interface.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Own the model client for the life of the process.

    The client is stored on ``app.state`` and handed to handlers through
    :func:`~completion_gateway.interface.dependencies.get_capability`.
    """
    settings = get_settings()
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    capability = build_capability(settings)
    app.state.capability = capability
    logger.info(
        "Model client ready (provider=%s, uploads=%s)",
        settings.provider,
        settings.upload_dir,
    )
    try:
        yield
    finally:
        app.state.capability = None
        await capability.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Completion Gateway",
        version="1.0.0",
        summary="Text, image, document and audio completions from a generative model.",
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(router)
    return app
