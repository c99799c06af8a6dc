"""Logging setup for the calculation engine.

Every module logs under the ``options_calc`` logger tree and adds no
handlers of its own. Applications call setup_logging() once; library use
without it stays silent apart from Python's last-resort handler.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .error_handling import ConfigurationError

ROOT_LOGGER_NAME = "options_calc"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _resolve_level(log_level: str | int) -> int:
    if isinstance(log_level, int):
        return log_level
    name = log_level.upper()
    if name not in LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level {log_level!r}; expected one of {', '.join(LOG_LEVELS)}")
    return logging.getLevelName(name)


def setup_logging(
    log_level: str | int = "INFO",
    log_file: Optional[str | Path] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """Attach console (and optional file) output to the engine logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        log_level: One of LOG_LEVELS (any case) or a numeric logging level
        log_file: Optional log file; parent directories are created
        log_format: Optional format string (default: DEFAULT_FORMAT)

    Returns:
        The ``options_calc`` logger

    Raises:
        ConfigurationError: If log_level is not a known level name

    Example:
        >>> logger = setup_logging(log_level="DEBUG", log_file="logs/calc.log")
        >>> logger.info("Analyzing %d positions", 3)
    """
    level = _resolve_level(log_level)
    formatter = logging.Formatter(log_format or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="a"))

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    # Engine output goes only to the handlers above
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for an engine module, e.g. get_logger("risk") -> options_calc.risk."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
