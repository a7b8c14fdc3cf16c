"""Run the openroute example application with uvicorn."""

import os

import uvicorn
from loguru import logger

from openroute.core.config import get_settings
from openroute.core.logging import setup_logging

APP_FACTORY = "openroute.api.main:create_app"


def uvicorn_log_config() -> dict[str, object]:
    """Route uvicorn's loggers through the Loguru intercept handler."""
    handler = {"handlers": ["default"], "level": "INFO", "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "handlers": {
            "default": {"class": "openroute.core.logging.InterceptHandler"},
        },
        "loggers": {
            "uvicorn": handler,
            "uvicorn.error": handler,
            "uvicorn.access": handler,
        },
    }


def main() -> None:
    settings = get_settings()
    setup_logging(settings)

    # Container platforms pass the listening port through PORT
    port = int(os.environ.get("PORT", settings.api_port))

    logger.info(
        "Starting Uvicorn on http://{}:{} ({})",
        settings.api_host,
        port,
        "auto-reload" if settings.debug else settings.environment,
    )
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=settings.api_host,
        port=port,
        reload=settings.debug,
        log_config=uvicorn_log_config(),
    )


if __name__ == "__main__":
    main()
