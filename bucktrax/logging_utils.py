"""
Project-wide logging setup.

Usage in any script:

    from bucktrax.logging_utils import get_logger
    logger = get_logger(__name__)
    logger.info("Predicted %d segments for profile %d", n, profile_id)
"""

import logging
import sys


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Return a named logger with a consistent format.

    Handlers are only attached on the first call for a given name, so calling
    this from several scripts in one process won't duplicate log lines.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger
