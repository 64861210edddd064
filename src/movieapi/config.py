"""Runtime configuration read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from movieapi.db.session import DEFAULT_DATABASE_URL

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


@dataclass(frozen=True)
class Settings:
    """Process-wide settings.

    Attributes:
        database_url: SQLAlchemy URL for the movie store.
        log_level: Root log level name.
        cors_origins: Origins allowed to call the API from a browser.
        host: Interface the server binds to.
        port: Port the server listens on.
    """

    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from MOVIEAPI_* environment variables.

        Raises:
            ValueError: If MOVIEAPI_PORT is not an integer.
        """
        origins = os.environ.get("MOVIEAPI_CORS_ORIGINS")
        return cls(
            database_url=os.environ.get("MOVIEAPI_DATABASE_URL", DEFAULT_DATABASE_URL),
            log_level=os.environ.get("MOVIEAPI_LOG_LEVEL", "INFO").upper(),
            cors_origins=(
                [o.strip() for o in origins.split(",") if o.strip()]
                if origins is not None
                else list(DEFAULT_CORS_ORIGINS)
            ),
            host=os.environ.get("MOVIEAPI_HOST", "127.0.0.1"),
            port=int(os.environ.get("MOVIEAPI_PORT", "8000")),
        )


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once for the process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
