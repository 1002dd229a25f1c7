"""Logging utilities with rich console output.

This module provides a centralized logging configuration that combines
Python's standard logging with rich's console output.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Book added: [bold]Dune[/bold]")
    logger.error("Author saving failed", exc_info=True)
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# Global console instance for consistent output
console = Console()

# Third-party loggers routed through the root handler by setup_logging()
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=True,  # Allow rich markup in log messages
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to INFO.
        show_time: Show timestamp in log output
        show_path: Show file path in log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    logger.setLevel(level.upper())
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # Propagate so pytest caplog can capture records
    logger.propagate = True

    return logger


def setup_logging(level: str = "INFO") -> None:
    """Setup logging configuration for the server process.

    Call once at the entry point before starting uvicorn. The server's own
    loggers are cleared of their handlers so their records reach the rich
    root handler instead of uvicorn's default formatter.

    Args:
        level: Default logging level, overridden by LOG_LEVEL
    """
    level = os.getenv("LOG_LEVEL", level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_rich_handler(show_time=True))

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True


def success(message: str) -> None:
    """Print a success message with a green checkmark.

    Example:
        >>> success("Server ready at http://0.0.0.0:4000/graphql")
        ✓ Server ready at http://0.0.0.0:4000/graphql
    """
    console.print(f"[green]✓[/green] {message}")
