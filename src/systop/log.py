"""
Logging setup for systop.

The terminal belongs to the UI, so logs only ever go to a file. Without a
log file the logger gets a NullHandler and stays quiet.
"""

import logging
import logging.handlers
from pathlib import Path

LOGGER_NAME = "systop"
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _get_log_level(level_name: str, default_level: int = logging.WARNING) -> int:
    """Convert a level name such as 'DEBUG' to its logging constant."""
    level = logging.getLevelName(str(level_name).upper())
    if isinstance(level, int):
        return level
    return default_level


def setup_logger(
    name: str = LOGGER_NAME,
    level: str = "WARNING",
    log_file: Path | None = None,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure and return the application logger.

    Args:
        name: Logger name; module loggers under it propagate to it.
        level: Level name (default: WARNING).
        log_file: Optional file path for log output.
        max_bytes: Size at which the log file rotates.
        backup_count: Number of rotated files to keep.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(_get_log_level(level))

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
    else:
        logger.addHandler(logging.NullHandler())

    # Prevent propagation to root logger
    logger.propagate = False
    return logger
