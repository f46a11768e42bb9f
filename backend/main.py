"""
main.py

Entry point for the QuickScan backend.

Loads .env, configures logging, builds the app through the application
factory and serves it with Flask's threaded server (one thread per
request). Any startup failure exits with a non-zero status.
"""

import logging
import os
import sys

from dotenv import load_dotenv

from app_factory import create_app
from quickscan.config import AppConfig, configure_logging
from quickscan.domain.errors import ConfigurationError

logger = logging.getLogger("quickscan")


def main() -> int:
    load_dotenv()
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        config = AppConfig()
        app = create_app(config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        return 1
    except ValueError as e:
        # Malformed numeric setting, e.g. PORT=abc
        logger.error(f"Configuration error: {e}")
        return 1

    logger.info(f"Starting QuickScan backend on http://{config.host}:{config.port}")
    try:
        app.run(host=config.host, port=config.port, debug=config.debug, threaded=True)
    except OSError as e:
        logger.error(f"Failed to bind {config.host}:{config.port}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
