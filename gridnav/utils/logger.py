"""Package logging.

Usage:
    from gridnav.utils.logger import get_logger
    logger = get_logger(__name__)

Everything logs under the ``gridnav`` logger. A stderr handler is attached
to it on first use unless the host application already configured the
root logger, in which case records simply propagate there.
"""
import logging
import os
from typing import Optional

PACKAGE_LOGGER = "gridnav"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the package logger. ``level`` defaults to GRIDNAV_LOG_LEVEL."""
    level_name = (level or os.getenv("GRIDNAV_LOG_LEVEL", "INFO")).upper()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not package_logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger that sits under the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    if logging.getLogger(PACKAGE_LOGGER).level == logging.NOTSET:
        setup_logging()
    return logging.getLogger(name)
