"""Logging configuration and setup."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import List

from ..config.models import LoggingConfig

# Libraries whose INFO chatter drowns out catalog progress
QUIET_LOGGERS = ("aiohttp", "asyncio")


def setup_logging(config: LoggingConfig) -> None:
    """Set up logging configuration.

    Log records go to stderr so the movie listing on stdout stays
    pipeable. Calling this again replaces the previous handlers.

    Args:
        config: Logging configuration.
    """
    root_logger = logging.getLogger()
    level = getattr(logging, config.level)
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)
    for handler in _build_handlers(config):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Logging configured with level {config.level}")


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    """Create the stderr handler and, if configured, a rotating file handler."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=config.max_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    return handlers


class LoggerMixin:
    """Gives services a logger named after their module and class."""

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
