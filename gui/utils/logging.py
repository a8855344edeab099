"""Logging helper for the UI layer.

Messages carry the grid or session they concern as ``key=value`` pairs so
a single log line says which view it is about.
"""

from __future__ import annotations

import logging

from gridnav.utils.logger import get_logger

logger = get_logger("gridnav.gui")


def log(message: str, level: int = logging.INFO, **context: object) -> None:
    if context:
        details = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        message = f"{message} ({details})"
    logger.log(level, message)
