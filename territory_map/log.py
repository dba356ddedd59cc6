# log.py
"""
Logging setup for the desktop application.

Modules log through ``logging.getLogger(__name__)``; only the entry point
calls :func:`configure_logging`.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logging(level="INFO"):
    """Install a single stream handler on the package logger.

    Parameters
    ----------
    level : str | int, default "INFO"
        Level name (``"DEBUG"``, ``"INFO"``...) or numeric level.

    Returns
    -------
    logging.Logger
        The configured ``territory_map`` logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("territory_map")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
