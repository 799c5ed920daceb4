"""Logging configuration."""

from __future__ import annotations

import logging

from flask import Flask

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(app: Flask) -> None:
    """Configure process-wide logging from LOG_LEVEL.

    Game transitions are logged by the ``lotto_room`` loggers at INFO; SQL
    echo stays at WARNING whatever the app level is.
    """

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("lotto_room").setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
