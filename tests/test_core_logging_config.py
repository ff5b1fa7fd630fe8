"""
Tests for the core logging configuration module.
"""
import pytest
import logging
from unittest.mock import patch

from core.logging_config import (
    ColoredFormatter,
    Colors,
    configure_logging_from_settings,
    get_logger,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after the test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


class TestSetupLogging:
    """Test setup_logging."""

    def test_sets_level_and_console_handler(self, restore_root_logger):
        """Test that the root logger gets the requested level and one console handler."""
        root_logger = setup_logging(log_level="WARNING", log_format="simple", enable_colors=False)

        assert root_logger is restore_root_logger
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], logging.StreamHandler)

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        """Test that an unknown level name means INFO."""
        root_logger = setup_logging(log_level="chatty", enable_colors=False)

        assert root_logger.level == logging.INFO

    def test_file_handler_writes_thread_name(self, restore_root_logger, tmp_path):
        """Test that the file handler records which thread logged."""
        log_file = tmp_path / "scheduler.log"
        setup_logging(log_level="DEBUG", log_file=log_file, enable_colors=False)

        get_logger("services.callback_scheduler.test").info("dispatching")
        for handler in restore_root_logger.handlers:
            handler.flush()

        content = log_file.read_text()
        assert "services.callback_scheduler.test" in content
        assert "[MainThread]" in content
        assert "dispatching" in content


class TestColoredFormatter:
    """Test the ColoredFormatter."""

    def test_colors_level_name(self):
        """Test that the level name is wrapped in its color."""
        formatter = ColoredFormatter("%(levelname)s - %(message)s")
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, None)

        formatted = formatter.format(record)

        assert f"{Colors.RED}ERROR{Colors.RESET}" in formatted
        assert formatted.endswith("failed")


class TestConfigureFromSettings:
    """Test configure_logging_from_settings."""

    def test_debug_forces_debug_level(self, restore_root_logger):
        """Test that debug mode overrides the configured level."""
        with patch('core.config.settings') as mock_settings:
            mock_settings.log_level = "ERROR"
            mock_settings.log_format = "simple"
            mock_settings.debug = True
            root_logger = configure_logging_from_settings()

        assert root_logger.level == logging.DEBUG

    def test_uses_configured_level(self, restore_root_logger):
        """Test that the configured level is applied when not in debug mode."""
        with patch('core.config.settings') as mock_settings:
            mock_settings.log_level = "WARNING"
            mock_settings.log_format = "json"
            mock_settings.debug = False
            root_logger = configure_logging_from_settings()

        assert root_logger.level == logging.WARNING
