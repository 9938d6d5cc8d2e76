"""Logging setup shared by the CLI and library callers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import DevSweepConfig

LOGGER_NAME = "devsweep"

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(config: DevSweepConfig, *, verbose: bool = False) -> logging.Logger:
    """Configure the ``devsweep`` logger hierarchy.

    Args:
        config: Run configuration providing level and optional log file.
        verbose: Force DEBUG on the console handler.

    Returns:
        The configured root ``devsweep`` logger.

    Raises:
        ValueError: If ``config.log_level`` is not a standard level name.

    """
    level_name = "DEBUG" if verbose else config.log_level.upper()
    if level_name not in _VALID_LEVELS:
        raise ValueError(f"Invalid log_level: {config.log_level!r}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Clear existing handlers to avoid duplicates when set up twice
    if logger.handlers:
        logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    console_handler.setLevel(getattr(logging, level_name))
    logger.addHandler(console_handler)

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
        logger.addHandler(file_handler)

    return logger
