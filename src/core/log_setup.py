"""Logging configuration for applications embedding the chess core. The library itself only creates module loggers."""

import logging

from src.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
    logging.getLogger("src").setLevel(settings.log_level)
