"""Logging setup for the ``plotplan`` command line tool."""

import logging
import sys
from typing import List, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Send ``plotplan.*`` records to stderr, and to ``log_file`` when given."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    logger = logging.getLogger("plotplan")
    logger.setLevel(level)
    for old in logger.handlers[:]:
        old.close()
        logger.removeHandler(old)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
