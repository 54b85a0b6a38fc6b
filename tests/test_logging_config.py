"""Tests for logging setup."""

import logging
import sys

import pytest

from articlepull.logging_config import CLI_FORMAT, setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    """Leave the package logger as it was found."""
    logger = logging.getLogger("articlepull")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_stderr_handler(self):
        """Test records go to stderr and stop at the package logger."""
        logger = setup_logging("debug", force=True)

        assert logger.name == "articlepull"
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert logger.handlers[0].stream is sys.stderr

    def test_file_handler(self, tmp_path):
        """Test a log file gets its own handler."""
        log_file = tmp_path / "articlepull.log"

        logger = setup_logging("INFO", log_file=str(log_file), format_string=CLI_FORMAT, force=True)
        logging.getLogger("articlepull.server").info("ready")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert log_file.read_text(encoding="utf-8") == "INFO articlepull.server: ready\n"

    def test_existing_handlers_kept(self):
        """Test a second call without force keeps the configured handlers."""
        first = setup_logging("INFO", force=True).handlers[0]

        logger = setup_logging("WARNING")

        assert logger.handlers == [first]
        assert logger.level == logging.WARNING

    def test_unknown_level_defaults_to_info(self):
        """Test unknown level names fall back to INFO."""
        assert setup_logging("chatty", force=True).level == logging.INFO

    def test_quiet_third_party_loggers(self):
        """Test chatty third-party loggers stay at WARNING."""
        setup_logging("DEBUG", force=True)

        assert logging.getLogger("aiohttp.access").level == logging.WARNING
