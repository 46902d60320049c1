#!/usr/bin/env python3
import logging

import uvicorn

from flagquiz.core.config import settings
from flagquiz.core.logging import setup_logging


setup_logging()
logger = logging.getLogger("run_server")


def main() -> None:
    logger.info(f"Servidor en http://localhost:{settings.PORT}")
    logger.info(f"Status:   http://localhost:{settings.PORT}/api/status")
    logger.info(f"Flags:    http://localhost:{settings.PORT}/api/questionset?mode=quickfire&category=flags")

    uvicorn.run(
        "flagquiz.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
