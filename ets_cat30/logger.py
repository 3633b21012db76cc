"""Logging setup"""

import logging
import sys
from typing import Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "[%(asctime)s] {%(name)s:%(lineno)d} %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

LOGLEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def setup_logger(level: str = "WARNING", logfile: Optional[str] = None) -> None:
    """
    Configure the ``ets_cat30`` logger.

    Args:
        level: Name of the log level (e.g. ``DEBUG``)
        logfile: Optional path of a file to log to instead of stdout

    Raises:
        ValueError: if the level name is unknown
    """
    try:
        loglevel = LOGLEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Invalid log level: {level}")

    if logfile:
        handler = logging.FileHandler(logfile, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT))

    root = logging.getLogger("ets_cat30")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(loglevel)

    LOGGER.debug("Logging initialized")
