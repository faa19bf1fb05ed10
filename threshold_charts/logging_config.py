"""
Logging setup for ThresholdCharts.

Everything the package logs goes through the ``threshold_charts`` logger;
modules log under it (``threshold_charts.decorations``,
``threshold_charts.rendering.surface``, ...). Each decoration pass logs one
DEBUG line, so ``-v`` on the command line is enough to follow what the
controller does on every render, resize and reload.
"""

import logging
import os
import sys
from typing import Optional


PACKAGE_LOGGER = "threshold_charts"
LOG_LEVEL_ENV_VAR = "THRESHOLD_CHARTS_LOG_LEVEL"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

# --verbose, default, --quiet, --silent
VERBOSITY_LEVELS = {1: logging.DEBUG, 0: logging.INFO, -1: logging.WARNING, -2: logging.ERROR}

# matplotlib reports font lookups and backend selection on its own loggers
NOISY_LOGGERS = ("matplotlib", "PIL")


def level_for_verbosity(verbosity: int) -> int:
    """
    Log level for a command-line verbosity.

    ``THRESHOLD_CHARTS_LOG_LEVEL`` (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    takes precedence over the verbosity when set.
    """
    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return getattr(logging, env_level)
    return VERBOSITY_LEVELS[max(-2, min(1, verbosity))]


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure the ``threshold_charts`` logger.

    Console output goes to stdout at the level given by ``verbosity``. A log
    file, when given, receives every record down to DEBUG whatever the
    console level is.

    Args:
        verbosity: 1 or more for DEBUG, 0 for INFO, -1 for WARNING, -2 or less for ERROR
        log_file: Optional path of a file to append records to
        format_string: Console format; timestamps unless verbosity is negative

    Returns:
        The configured package logger

    Example:
        >>> setup_logging(verbosity=1)
        >>> setup_logging(log_file="threshold_charts.log")
    """
    level = level_for_verbosity(verbosity)
    if format_string is None:
        format_string = DEFAULT_FORMAT if verbosity >= 0 else SIMPLE_FORMAT

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(min(level, logging.DEBUG) if log_file else level)
    logger.propagate = False
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='a')
        except OSError as e:
            logger.warning(f"Failed to create log file {log_file}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            logger.addHandler(file_handler)
            logger.info(f"Logging to file: {log_file}")

    logger.debug(f"Logging configured: level={logging.getLevelName(level)}")
    return logger
