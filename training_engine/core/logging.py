"""Logging bootstrap for hosts and scripts."""

import logging

from training_engine.core.config import settings

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger.

    ``level`` defaults to ``settings.LOG_LEVEL`` (``DEBUG`` forced when
    ``settings.DEBUG`` is set).
    """
    if level is None:
        level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL
    logging.basicConfig(level=level.upper(), format=_FORMAT)
