"""
Logger factory.

Every service gets its own named logger with a tagged console handler so
terminal output shows which part of the app is talking.
"""

import logging

from app.core.config import settings


def get_logger(name: str, tag: str = "") -> logging.Logger:
    """
    Return a configured logger for a service.

    Args:
        name: Logger name (e.g. "llm", "applications")
        tag: Prefix shown in front of each message, defaults to the upper-cased name

    Returns:
        The named logger, with a StreamHandler attached on first use
    """
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            f"%(asctime)s [{tag or name.upper()}] %(levelname)s %(message)s"
        ))
        logger.addHandler(handler)

    return logger
