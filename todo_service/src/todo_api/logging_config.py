from __future__ import annotations

import logging
import os
from datetime import datetime

from .settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Package logger; module loggers (todo_api.*) propagate to it.
_PACKAGE_LOGGER = "todo_api"


class _ServiceFileHandler(logging.FileHandler):
    """Marker subclass so a reconfiguration can find and replace our handler."""


# PUBLIC_INTERFACE
def configure_logging(settings: Settings) -> logging.Logger:
    """
    Attach an append-only file handler to the package logger and write a
    session banner.

    Calling this again (e.g. building a second app in tests) closes and
    replaces the handler installed by the previous call.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, _ServiceFileHandler):
            logger.removeHandler(handler)
            handler.close()

    log_dir = os.path.dirname(settings.log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    handler = _ServiceFileHandler(settings.log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    logger.info(
        "======== Session started: %s ========",
        datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    )
    return logger
