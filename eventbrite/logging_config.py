"""
Logging configuration for the Eventbrite API client

Library code only ever asks for module loggers; handlers are attached by
applications (or the demo CLI) through setup_logging().
"""

import logging
import sys
from pathlib import Path


class EventbriteLogger:
    """Centralized logger for the client"""

    def __init__(
        self, name: str = "eventbrite", log_file: Path | None = None, console_output: bool = True
    ):
        """
        Initialize logger

        Args:
            name: Logger name (usually "eventbrite" for the package logger)
            log_file: Path to log file (optional)
            console_output: Whether to print to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        # Clear existing handlers
        self.logger.handlers = []

        # Format: timestamp - module - level - message
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

        if console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def get_logger(self) -> logging.Logger:
        """Get the underlying logger instance"""
        return self.logger


def setup_logging(log_file: Path | None = None, verbose: bool = False) -> logging.Logger:
    """
    Attach console and optional file handlers to the package logger

    Args:
        log_file: Where to append DEBUG-level request logs (optional)
        verbose: Show DEBUG messages on the console as well

    Returns:
        Configured logger instance
    """
    logger = EventbriteLogger(name="eventbrite", log_file=log_file).get_logger()

    if verbose:
        for handler in logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(logging.DEBUG)

    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get logger for a specific module

    Args:
        module_name: Name of the module (e.g., 'client', 'http_client')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"eventbrite.{module_name}")
