"""
Logging Configuration

Single stream handler on the root logger with a timestamped format.
"""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """
    Configure root logging for the process.

    Args:
        level: Level name or number; unknown names fall back to INFO
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)

    # Werkzeug request lines are noisy at INFO
    logging.getLogger("werkzeug").setLevel(max(level, logging.WARNING))
