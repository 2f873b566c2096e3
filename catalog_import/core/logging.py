"""
Logging configuration module for the catalog import engine.

This module provides clean, configurable logging setup for both the
operators running batch imports and developers debugging them.
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Optional, Generator
from enum import Enum


class LogLevel(Enum):
    """Enumeration of available logging levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class UserMode(Enum):
    """User mode enumeration for different logging configurations."""

    TECHNICAL = "technical"
    BUSINESS = "business"
    SILENT = "silent"


class LoggingConfig:
    """
    Centralized logging configuration class.

    Provides different logging setups for different types of users:
    - Technical users: Detailed logs with timestamps and module names
    - Business users: Clean, minimal logs focused on results
    - Silent mode: Only critical errors
    """

    CONFIGURATIONS = {
        UserMode.TECHNICAL: {
            "level": LogLevel.DEBUG,
            "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            "description": "🔧 Technical mode: Detailed logging enabled",
        },
        UserMode.BUSINESS: {
            "level": LogLevel.INFO,
            "format": "%(levelname)s: %(message)s",
            "description": "👔 Business user mode: Clean, minimal logging",
        },
        UserMode.SILENT: {
            "level": LogLevel.ERROR,
            "format": "ERROR: %(message)s",
            "description": "🔇 Silent mode: Only critical errors shown",
        },
    }

    NOISY_LOGGERS = [
        "openpyxl",
        "sqlalchemy.engine",
        "urllib3",
    ]

    def __init__(self, mode: UserMode = UserMode.BUSINESS):
        """
        Initialize logging configuration.

        Args:
            mode: User mode (TECHNICAL, BUSINESS, or SILENT)
        """
        self.mode = mode
        self.config = self.CONFIGURATIONS[mode]

    def setup_logging(self, force_reconfigure: bool = True) -> logging.Logger:
        """
        Set up logging based on the configured mode.

        Args:
            force_reconfigure: Whether to force reconfiguration of existing loggers

        Returns:
            Configured logger instance
        """
        if force_reconfigure:
            for handler in logging.root.handlers[:]:
                logging.root.removeHandler(handler)

        logging.basicConfig(
            level=self.config["level"].value,
            format=self.config["format"],
            handlers=[logging.StreamHandler(sys.stdout)],
            force=force_reconfigure,
        )

        self._suppress_noisy_loggers()

        logger = logging.getLogger("catalog_import")
        logger.setLevel(self.config["level"].value)
        logger.debug(self.config["description"])

        return logger

    def _suppress_noisy_loggers(self):
        """Suppress verbose logging from third-party libraries."""
        for logger_name in self.NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    @classmethod
    def quick_setup(cls, mode: UserMode = UserMode.BUSINESS) -> logging.Logger:
        """Set up logging for ``mode`` and return the package logger."""
        return cls(mode).setup_logging()


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Set up logging with a simple verbose/quiet toggle.

    Args:
        verbose: If True, use technical mode
        quiet: If True (and not verbose), only show errors

    Returns:
        Configured logger
    """
    if verbose:
        mode = UserMode.TECHNICAL
    elif quiet:
        mode = UserMode.SILENT
    else:
        mode = UserMode.BUSINESS
    return LoggingConfig.quick_setup(mode)


class ExecutionTimer:
    """
    Context manager for timing code execution.

    Integrates with the logging system to show timing information.
    """

    def __init__(
        self,
        name: str = "Operation",
        logger: Optional[logging.Logger] = None,
        show_start: bool = True,
        show_end: bool = True,
    ):
        self.name = name
        self.logger = logger or logging.getLogger("catalog_import")
        self.show_start = show_start
        self.show_end = show_end
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start_time = time.time()
        if self.show_start:
            self.logger.info(f"⏱️  Starting: {self.name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.time()
        elapsed = self.end_time - self.start_time

        if exc_type is None:
            if self.show_end:
                self.logger.info(
                    f"✅ Completed: {self.name} in {self._format_duration(elapsed)}"
                )
        else:
            self.logger.error(f"❌ Failed: {self.name} after {self._format_duration(elapsed)}")

    def _format_duration(self, seconds: float) -> str:
        """Format duration in a human-readable way."""
        if seconds < 1:
            return f"{seconds * 1000:.0f}ms"
        elif seconds < 60:
            return f"{seconds:.2f}s"
        minutes = int(seconds // 60)
        remaining_seconds = seconds % 60
        return f"{minutes}m {remaining_seconds:.1f}s"

    @property
    def elapsed_time(self) -> Optional[float]:
        """Get elapsed time if timing is complete."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return None


@contextmanager
def time_operation(
    name: str,
    logger: Optional[logging.Logger] = None,
    show_start: bool = True,
    show_end: bool = True,
) -> Generator[ExecutionTimer, None, None]:
    """
    Context manager for timing operations.

    Example:
        with time_operation("Importing menu.tsv", logger):
            manager.import_file(path)
    """
    timer = ExecutionTimer(name, logger, show_start, show_end)
    with timer:
        yield timer


__all__ = [
    "LoggingConfig",
    "UserMode",
    "LogLevel",
    "ExecutionTimer",
    "time_operation",
    "setup_logging",
]
