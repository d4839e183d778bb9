"""Centralized logging configuration for duplex_copy.

This module provides a consistent logging setup for all duplex_copy components.
It configures the 'duplex_copy' logger namespace and provides utilities for
adjusting log levels throughout the library.

The module provides:
    - get_logger(): Get the standard duplex_copy logger
    - configure_logging(): Set up logging with specified levels
    - LoggerMixin: Mixin class providing _logger attribute

Example:
    >>> from duplex_copy.core.logging_config import configure_logging, get_logger
    >>> import logging
    >>>
    >>> configure_logging(level=logging.DEBUG)
    >>> logger = get_logger()
    >>> logger.info("duplex_copy initialized")
"""

import logging
from typing import Any

# The standard logger name used throughout duplex_copy
LOGGER_NAME = "duplex_copy"

# Default logging format
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Related library loggers that should be configured together
RELATED_LOGGERS = [
    "urllib3",
    "requests",
    "hydra",
]


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a duplex_copy logger.

    Args:
        name: Optional sub-logger name. If provided, returns a child logger
              under the duplex_copy namespace (e.g., 'duplex_copy.planner').
              If None, returns the main duplex_copy logger.

    Returns:
        The configured logger instance.

    Example:
        >>> logger = get_logger()  # Main duplex_copy logger
        >>> planner_logger = get_logger("planner")  # duplex_copy.planner
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(
    level: int = logging.WARNING,
    library_level: int | None = None,
    format_string: str = DEFAULT_FORMAT,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Configure logging for duplex_copy and related libraries.

    This function sets up the logging configuration for duplex_copy and the
    HTTP and configuration libraries it drives (urllib3, requests, hydra). It
    should be called once during application initialization.

    Args:
        level: Log level for the duplex_copy logger. Defaults to WARNING.
        library_level: Log level for related libraries. If None, uses the
                       same level as 'level'.
        format_string: Format string for log messages.
        handler: Optional handler to add to the logger. If None, uses
                StreamHandler with the specified format.

    Returns:
        The configured duplex_copy logger.

    Example:
        >>> import logging
        >>> configure_logging(level=logging.DEBUG)
        >>> configure_logging(
        ...     level=logging.INFO,
        ...     library_level=logging.WARNING,  # Less verbose for libs
        ... )
    """
    if library_level is None:
        library_level = level

    logger = get_logger()
    logger.setLevel(level)

    if not logger.handlers:
        if handler is None:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(handler)

    for logger_name in RELATED_LOGGERS:
        logging.getLogger(logger_name).setLevel(library_level)

    return logger


def apply_logger_overrides(overrides: dict[str, Any]) -> None:
    """Apply logger level overrides from a configuration dictionary.

    Args:
        overrides: Dictionary mapping logger names to log levels.

    Example:
        >>> apply_logger_overrides({
        ...     "urllib3": logging.WARNING,
        ...     "duplex_copy.executor": logging.DEBUG,
        ... })
    """
    for name, level in overrides.items():
        logging.getLogger(name).setLevel(level)


class LoggerMixin:
    """Mixin class that provides a _logger attribute.

    Classes that inherit from this mixin get a _logger property that
    returns a child logger under the duplex_copy namespace, named after
    the class.

    Example:
        >>> class MyStore(LoggerMixin):
        ...     def load(self):
        ...         self._logger.info("Loading started")
        ...
        >>> # Logs to 'duplex_copy.MyStore'
    """

    @property
    def _logger(self) -> logging.Logger:
        """Get the logger for this class."""
        return get_logger(self.__class__.__name__)


__all__ = [
    "LOGGER_NAME",
    "get_logger",
    "configure_logging",
    "apply_logger_overrides",
    "LoggerMixin",
]
