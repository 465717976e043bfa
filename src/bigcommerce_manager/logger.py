"""
Logging utilities for BigCommerce metafield operations
"""
import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

PACKAGE_LOGGER = "bigcommerce_manager"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handlers(log_file: Optional[Union[str, Path]]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def setup_logger(
    name: str = PACKAGE_LOGGER,
    log_file: Optional[Union[str, Path]] = None,
    level: str = "INFO"
) -> logging.Logger:
    """Route a logger to stdout, and to ``log_file`` when one is given.

    Calling it again replaces the previous handlers, so each CLI run logs
    exactly once per destination.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_command_logger(command: str, level: str = "INFO",
                       log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Configure the package logger for a CLI command and return its child logger"""
    setup_logger(PACKAGE_LOGGER, log_file=log_file, level=level)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{command}")
