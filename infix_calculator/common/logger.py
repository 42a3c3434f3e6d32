"""Package-wide logger."""
import logging
import sys
from typing import Union

LOGGER_NAME = "infix_calculator"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger() -> logging.Logger:
    """
    Return the package logger, attaching a stderr handler the first time.

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.setLevel(logging.WARNING)
    return log


def set_log_level(level: Union[int, str]) -> None:
    """Change the level of the package logger (e.g. ``"DEBUG"`` or ``logging.INFO``)."""
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)


logger = get_logger()
