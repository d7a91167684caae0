"""
================================================================================
Test Unit Common Utilities
================================================================================

Logging setup shared by the runner and library modules.

Exports:
    - init_logger: Initialize the loguru logger with standard settings
    - get_config: Convenience function to get configuration values

Usage:
    from testunit.common import init_logger

    init_logger(level="DEBUG")

================================================================================
"""

import os
import sys
from typing import Any, Optional

from loguru import logger

from testunit.framework.config_loader import ConfigLoader


DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get a configuration value.

    Args:
        key: Configuration key using dot notation
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    return ConfigLoader().get(key, default)


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.
        force: Re-initialize even if already initialized.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/testunit.log")
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    # Remove default handler
    logger.remove()

    level = (level or get_config("logging.level", "INFO")).upper()
    format_string = format_string or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or get_config("logging.file")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level,
            colorize=False,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def reset_logger() -> None:
    """Allow the next init_logger() call to reconfigure sinks."""
    global _logger_initialized
    _logger_initialized = False


__all__ = [
    "DEFAULT_LOG_FORMAT",
    "get_config",
    "init_logger",
    "reset_logger",
]
