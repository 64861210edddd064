"""Run the movie API with uvicorn.

Usage:
    python -m movieapi
"""

import logging

import uvicorn

from movieapi.api.app import create_app
from movieapi.config import Settings, configure_logging

logger = logging.getLogger("movieapi")


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    app = create_app(settings)
    logger.info("Starting Movie API on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
