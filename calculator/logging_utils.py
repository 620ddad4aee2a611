"""Logging setup shared by the engine and the host adapters."""
import logging
import sys
from typing import Optional, Union

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
HANDLER_NAME = "calculator-stderr"
LOGGER_NAMES = ("calculator", "app")


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach one stderr handler to the ``calculator`` and ``app`` loggers.

    Idempotent: a logger that already carries the named handler only has its
    level adjusted.
    """
    if level is None:
        from .settings import get_settings
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
            handler = logging.StreamHandler(sys.stderr)
            handler.set_name(HANDLER_NAME)
            handler.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(handler)
            logger.propagate = False
    return logging.getLogger("calculator")
