"""
Logging Configuration Module

This module provides logging configuration for the stats page generator:
a single console handler on stdout attached to the root logger.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"


class StatsLoggingConfig:
    """Console logging configuration for the stats page generator."""

    def __init__(self):
        self._console_handler: Optional[logging.Handler] = None

    def setup_logging(self, debug: bool = False) -> None:
        """
        Configure root logging for a generator run.

        Calling this again replaces the previously installed handler, so the
        level can be changed after configuration has been reloaded.

        Args:
            debug: Whether to enable debug logging
        """
        root_logger = logging.getLogger()
        if self._console_handler is not None:
            root_logger.removeHandler(self._console_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self._console_handler = console_handler

        root_logger.addHandler(console_handler)
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    def stop(self) -> None:
        """Flush and detach the console handler."""
        if self._console_handler:
            self._console_handler.flush()
            logging.getLogger().removeHandler(self._console_handler)
            self._console_handler = None


# Global logging configuration instance
logging_config = StatsLoggingConfig()


def setup_logging(debug: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        debug: Whether to enable debug logging
    """
    logging_config.setup_logging(debug)


def stop_logging() -> None:
    """Stop logging and cleanup."""
    logging_config.stop()


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
