"""Logging configuration helpers."""

import logging

LOGGER_NAME = "fitplan"
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the fitplan logger and set its level.

    Accepts a numeric level or a level name such as ``"DEBUG"``, so the value
    can come straight from ``Settings.log_level``. Repeated calls only update
    the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
