"""Process entry point for ``completion-gateway``."""

from __future__ import annotations

import logging

import uvicorn

from completion_gateway.infrastructure.config import get_settings
from completion_gateway.interface.app import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(
        create_app(),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=settings.log_level.upper() == "DEBUG",
    )


if __name__ == "__main__":
    main()
