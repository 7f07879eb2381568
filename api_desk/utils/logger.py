"""Logging setup for api-desk.

Every module logs through the single `api_desk` logger. Library use leaves it
unconfigured (records propagate to the root logger); the CLI configures it
once via `configure_from_env`.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from api_desk.utils import config

LOGGER_NAME = "api_desk"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logger(
    name: str = LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return a logger.

    Handlers are attached only once; later calls just adjust the level.

    Args:
        name: Logger name.
        level: Logging level.
        log_file: Optional path to log file. If None, logs to stderr only.

    Returns:
        Configured logger.
    """
    log = logging.getLogger(name)
    log.setLevel(level)
    if log.handlers:
        return log

    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(fmt)
    log.addHandler(stream)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def configure_from_env() -> logging.Logger:
    """Set up the application logger from API_DESK_LOG_LEVEL / API_DESK_LOG_FILE."""
    return setup_logger(LOGGER_NAME, level=config.log_level(), log_file=config.log_file())


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return the application logger."""
    return logging.getLogger(name)
