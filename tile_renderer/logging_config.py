"""
Log output for the tile pipeline.

Everything the package logs goes through the ``tile_renderer`` logger and its
children (``tile_renderer.calculations.classifier``,
``tile_renderer.rendering.surface``, ...). Render milestones such as feature
counts, viewport scale and saved tile size are INFO; per-stage detail is
DEBUG.
"""

import logging
import os
import sys
from typing import Optional


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

LOG_LEVEL_ENV_VAR = "TILE_RENDERER_LOG_LEVEL"
PACKAGE_LOGGER = "tile_renderer"

_VERBOSITY_LEVELS = {
    -1: logging.WARNING,
    0: logging.INFO,
    1: logging.DEBUG,
}


def _level_for(verbosity: int) -> int:
    if verbosity >= 1:
        return logging.DEBUG
    return _VERBOSITY_LEVELS.get(verbosity, logging.ERROR)


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Point the ``tile_renderer`` logger at stdout and, optionally, a file.

    Calling it again replaces the previous handlers, so the CLI can
    reconfigure after the import-time default.

    Args:
        verbosity: 1+ for DEBUG, 0 for INFO, -1 for WARNING, -2 or less for ERROR
        log_file: Also append every record (DEBUG and up) to this file
        format_string: Console format; quiet levels default to a bare
            ``LEVEL: message`` line

    Environment Variables:
        TILE_RENDERER_LOG_LEVEL: Level name that wins over ``verbosity``

    Example:
        >>> setup_logging(verbosity=1)
        >>> setup_logging(verbosity=-1, log_file="tiles.log")
    """
    level = _level_for(verbosity)

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = getattr(logging, env_level)

    if format_string is None:
        format_string = DEFAULT_FORMAT if verbosity >= 0 else SIMPLE_FORMAT

    # matplotlib and cartopy log through the root logger
    logging.root.setLevel(logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='a')
        except OSError as e:
            logger.warning(f"Cannot open log file {log_file}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            logger.addHandler(file_handler)
            logger.info(f"Appending logs to {log_file}")

    logger.debug(f"Log level {logging.getLevelName(level)}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, e.g. ``get_logger(__name__)`` inside the package."""
    return logging.getLogger(name)
