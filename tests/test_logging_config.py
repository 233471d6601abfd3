"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from commit_pulse.logging_config import console_level, get_logger, setup_logging


class TestConsoleLevel:
    """Test flag to level mapping."""

    def test_default_is_warning(self):
        assert console_level() == logging.WARNING

    def test_verbose(self):
        assert console_level(verbose=True) == logging.DEBUG

    def test_quiet_wins(self):
        assert console_level(verbose=True, quiet=True) == logging.ERROR


class TestSetupLogging:
    """Test handler installation on the commit_pulse logger."""

    def test_quiet_console(self, clean_logging):
        logger = setup_logging(quiet=True)

        assert logger is clean_logging
        assert logger.level == logging.ERROR
        assert [type(h) for h in logger.handlers] == [RichHandler]

    def test_repeated_setup_replaces_handlers(self, clean_logging):
        setup_logging()
        logger = setup_logging(verbose=True)

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_log_file_keeps_info_while_console_quiet(self, clean_logging, tmp_path):
        log_path = tmp_path / "pulse.log"
        logger = setup_logging(quiet=True, log_file=str(log_path))

        get_logger("analytics.engine").info("Snapshot built")

        console_handler, file_handler = logger.handlers
        assert console_handler.level == logging.ERROR
        assert file_handler.level == logging.INFO
        text = log_path.read_text(encoding="utf-8")
        assert "commit_pulse.analytics.engine - INFO - Snapshot built" in text


class TestGetLogger:
    """Test logger namespacing."""

    def test_root(self):
        assert get_logger().name == "commit_pulse"

    def test_relative_name(self):
        assert get_logger("history.git_extractor").name == "commit_pulse.history.git_extractor"

    def test_qualified_name_unchanged(self):
        assert get_logger("commit_pulse.api").name == "commit_pulse.api"
