"""Tests for logger module."""

import logging
from uplan_volumes.logger import setup_logger, logger, set_debug_mode, level_from_env


class TestSetupLogger:
    """Tests for setup_logger function."""

    def test_default_logger(self, monkeypatch):
        """Test creating logger with default settings."""
        monkeypatch.delenv("UPLAN_LOG_LEVEL", raising=False)
        test_logger = setup_logger("test_logger_default")
        assert test_logger.level == logging.INFO
        assert len(test_logger.handlers) > 0

    def test_logger_with_debug(self):
        """Test creating logger with debug enabled."""
        test_logger = setup_logger("test_logger_debug", debug=True)
        assert test_logger.level == logging.DEBUG
        assert test_logger.handlers[0].level == logging.DEBUG

    def test_logger_with_custom_level(self):
        """Test creating logger with custom level."""
        test_logger = setup_logger("test_logger_custom", level=logging.WARNING)
        assert test_logger.level == logging.WARNING

    def test_level_from_environment(self, monkeypatch):
        """Test UPLAN_LOG_LEVEL sets the level when none is given."""
        monkeypatch.setenv("UPLAN_LOG_LEVEL", "warning")
        assert setup_logger("test_logger_env").level == logging.WARNING

    def test_logger_avoids_duplicate_handlers(self):
        """Test that calling setup_logger twice doesn't add duplicate handlers."""
        test_logger = setup_logger("test_logger_duplicate")
        handler_count = len(test_logger.handlers)
        assert len(setup_logger("test_logger_duplicate").handlers) == handler_count

    def test_message_format(self, capsys):
        """Test records are written as LEVEL: message to stdout."""
        test_logger = setup_logger("test_logger_format", level=logging.INFO)
        test_logger.propagate = False
        test_logger.info("hello")
        assert capsys.readouterr().out == "INFO: hello\n"

    def test_debug_format_names_module(self, capsys):
        """Test debug records carry the emitting module."""
        test_logger = setup_logger("test_logger_debug_format", debug=True)
        test_logger.propagate = False
        test_logger.debug("fallback")
        assert capsys.readouterr().out == "DEBUG [test_logger]: fallback\n"


class TestLevelFromEnv:
    """Tests for level_from_env function."""

    def test_unset(self):
        """Test missing variable gives INFO."""
        assert level_from_env({}) == logging.INFO

    def test_known_names(self):
        """Test level names are case-insensitive."""
        assert level_from_env({"UPLAN_LOG_LEVEL": "debug"}) == logging.DEBUG
        assert level_from_env({"UPLAN_LOG_LEVEL": " ERROR "}) == logging.ERROR

    def test_unknown_name(self):
        """Test unknown names fall back to INFO."""
        assert level_from_env({"UPLAN_LOG_LEVEL": "LOUD"}) == logging.INFO


class TestGlobalLogger:
    """Tests for the package logger."""

    def test_package_logger_name(self):
        """Test the global logger is the package logger."""
        assert logger.name == "uplan_volumes"

    def test_set_debug_mode(self):
        """Test toggling debug mode on and off."""
        set_debug_mode(True)
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)
        assert all("%(module)s" in h.formatter._fmt for h in logger.handlers)

        set_debug_mode(False)
        assert logger.level == logging.INFO
        assert all(h.level == logging.INFO for h in logger.handlers)
        assert all(h.formatter._fmt == "%(levelname)s: %(message)s" for h in logger.handlers)
