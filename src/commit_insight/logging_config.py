"""
Logging configuration for Commit Insight.

Library modules only create loggers; handlers are installed here, by the CLI.
Handlers go on the ``commit_insight`` logger rather than the root logger, so
an embedding application keeps control of its own logging. Records still
propagate to the root logger.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "commit_insight"

# Marks handlers owned by setup_logging so a later call can replace them
_HANDLER_FLAG = "_commit_insight_handler"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the commit_insight logger with a rich console handler.

    Calling this again replaces the handlers installed by the previous call,
    so the latest level and log file always win.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to append logs to

    Returns:
        Configured logger instance for commit_insight
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER)
    _remove_handlers(logger)

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
        log_time_format="[%X]",
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def _remove_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'commit_insight.analytics')
              If None, returns the root commit_insight logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
