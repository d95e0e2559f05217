"""Logging setup for the Lambda runtime and local scripts."""

import logging

from build_watcher.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging() -> None:
    """
    Configure the root logger once.

    The Lambda runtime installs its own handler on the root logger, so only
    the level and format are adjusted when a handler already exists.
    """
    settings = get_settings()
    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    if root.handlers:
        for h in root.handlers:
            h.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
