"""
Logging for workpulse.

Everything is logged through the ``workpulse`` logger tree. Console output
goes to stderr through a rich handler so that piped stdout (and the progress
bar) stay readable; an optional plain-text file handler keeps a full record.
"""

import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "workpulse"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Console level: ERROR when quiet wins, DEBUG when verbose, else WARNING."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install handlers for one CLI invocation.

    Args:
        verbose: Show DEBUG records and source locations
        quiet: Show only errors
        log_file: Append every record (DEBUG and up) to this file

    Returns:
        The ``workpulse`` logger
    """
    level = level_for(verbose, quiet)

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        # Paths and commit subjects may contain [brackets]
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    console_handler.setLevel(level)
    handlers: List[logging.Handler] = [console_handler]

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    # Third-party loggers stay at WARNING; only our tree goes lower
    logging.basicConfig(level=logging.WARNING, format="%(message)s", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_file else level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``workpulse`` tree (``__name__`` of any module works)."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
