"""Console entry point: `orderhub` runs the API under uvicorn."""

import logging

import uvicorn

from orderhub.config import settings

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=settings.log_level)
    logger.info("server running on %d port", settings.port)
    uvicorn.run(
        "orderhub.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
