"""
Run the API server: python -m tournament_api
Host, port and log level come from the environment (see config.Settings).
"""
from __future__ import annotations

import logging

import uvicorn

from tournament_api.config import Settings
from tournament_api.logging_config import configure_logging

logger = logging.getLogger("tournament_api")


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Starting tournament API on http://%s:%d (health: /health, base: /api)", settings.host, settings.port)
    uvicorn.run(
        "tournament_api.api:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
