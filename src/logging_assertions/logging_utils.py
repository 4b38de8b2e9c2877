"""Diagnostic logging for the logger test double itself."""

from __future__ import annotations

import logging


class LoggingManager:
    """Manage diagnostic logging configuration and messages."""

    def __init__(self, logger_name: str = "logging_assertions") -> None:
        self.logger = logging.getLogger(logger_name)
        # Diagnostics must never reach a logger captured by the mock.
        self.logger.propagate = False

    def setup(self, verbose: bool) -> None:
        """Send diagnostics to the console, at DEBUG when verbose."""
        level = logging.DEBUG if verbose else logging.INFO

        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))

        self.logger.handlers.clear()
        self.logger.addHandler(console)
        self.logger.setLevel(level)

    def log(self, msg: str) -> None:
        """Log an informational message."""
        self.logger.info(msg)

    def debug(self, msg: str, *args: object) -> None:
        """Log a debug message, formatting ``args`` lazily like the stdlib."""
        self.logger.debug(msg, *args)


DEFAULT_LOGGER = LoggingManager()


def setup_logging(verbose: bool) -> None:
    """Configure the default diagnostic logger."""
    DEFAULT_LOGGER.setup(verbose)
