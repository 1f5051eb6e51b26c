# src/api_practice/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then serves the HTTP API with uvicorn
until interrupted.
"""

from __future__ import annotations

import logging

import uvicorn

from ..cli.bootstrap import create_app_state
from ..config import get_settings
from ..logging_setup import setup_logging
from ..web.app import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info("Starting %s on %s:%s...", settings.app_name, settings.host, settings.port)

    state = create_app_state(settings=settings)
    app = create_app(state.task_service, title=settings.app_name)

    try:
        # log_config=None: keep the handlers installed by setup_logging().
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        state.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
