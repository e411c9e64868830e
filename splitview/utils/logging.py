"""Logging setup for the splitview CLI.

Library modules only create module-level loggers; the handler lives on the
"splitview" package logger and is attached once, when the CLI starts.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send splitview's log records to stderr.

    Calling this again only changes the level.

    Args:
        verbose: Log layout commands at DEBUG level

    Returns:
        The configured "splitview" logger
    """
    level = logging.DEBUG if verbose else logging.INFO
    package_logger = logging.getLogger("splitview")

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package_logger.addHandler(handler)

    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)
    return package_logger
