"""
Sanitary Map AI - Logging Configuration
Routes every ``src.*`` module logger to stdout in one format.
"""

import logging
import sys
from typing import Optional

from src.core.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

# Third-party loggers kept at WARNING unless running in debug mode
QUIET_LOGGERS = ("httpx", "sqlalchemy.engine", "uvicorn.access")


def setup_logging(
    config: Optional[Settings] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Configure the root handler and return the package logger.

    Args:
        config: Settings providing ``log_level`` and ``debug``
        level: Explicit level overriding ``config.log_level``

    Returns:
        The ``src`` logger
    """
    config = config or default_settings
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    package_logger = logging.getLogger("src")
    package_logger.setLevel(log_level)

    if not config.debug:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return package_logger
