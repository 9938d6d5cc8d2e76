"""Tests for logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from rich.logging import RichHandler

from devsweep.config import DevSweepConfig
from devsweep.log import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def reset_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


class TestSetupLogging:
    """Tests for console and file handler configuration."""

    def test_console_handler_uses_configured_level(self) -> None:
        logger = setup_logging(DevSweepConfig(log_level="INFO"))

        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert isinstance(handler, RichHandler)
        assert handler.level == logging.INFO

    def test_verbose_forces_debug(self) -> None:
        logger = setup_logging(DevSweepConfig(log_level="ERROR"), verbose=True)
        assert logger.handlers[0].level == logging.DEBUG

    def test_repeated_setup_does_not_duplicate_handlers(self) -> None:
        setup_logging(DevSweepConfig())
        logger = setup_logging(DevSweepConfig())
        assert len(logger.handlers) == 1

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid log_level"):
            setup_logging(DevSweepConfig(log_level="LOUD"))

    def test_file_handler_writes_messages(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "devsweep.log"
        logger = setup_logging(DevSweepConfig(log_file=log_file))

        logging.getLogger(f"{LOGGER_NAME}.modules.node").debug("Deleted %s", "/tmp/x")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "| DEBUG | Deleted /tmp/x" in content
