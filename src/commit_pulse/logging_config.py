"""
Logging configuration for Commit Pulse.

Handlers hang off the ``commit_pulse`` logger instead of the root logger, so
an application embedding the engine keeps control of its own logging.
Skipped commit dates and repository fallbacks arrive at WARNING, facade
timings and parse counts at DEBUG/INFO.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "commit_pulse"

LOG_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def console_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags to a logging level; quiet wins over verbose."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the commit_pulse logger with a rich console handler.

    Calling it again replaces the handlers installed earlier, so repeated
    runs in one process do not print every record twice.

    Args:
        verbose: Enable DEBUG level console logging
        quiet: Suppress all but ERROR level console logging
        log_file: Optional file that receives INFO and above regardless
                  of the console level

    Returns:
        Configured logger instance for commit_pulse
    """
    level = console_level(verbose=verbose, quiet=quiet)

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
        log_time_format="[%X]",
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    logger_level = level
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_handler.setLevel(min(level, logging.INFO))
        logger.addHandler(file_handler)
        logger_level = min(level, logging.INFO)

    logger.setLevel(logger_level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'commit_pulse.analytics.engine')
              If None, returns the root commit_pulse logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
