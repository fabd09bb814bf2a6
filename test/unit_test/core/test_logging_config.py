"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import logging
from unittest.mock import patch

import pytest

from tesvik_portal.core import logging_config
from tesvik_portal.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


def _console_handler():
    root_logger = logging.getLogger()
    return next((h for h in root_logger.handlers if isinstance(h, logging.StreamHandler)), None)


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        console_handler = _console_handler()
        assert console_handler is not None
        assert console_handler.level == expected_level

    def test_no_duplicate_handlers(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)
        assert len(logging.getLogger().handlers) == 1


class TestSetupLoggingFormats:
    @pytest.mark.parametrize(
        "log_format,expected",
        [("simple", SIMPLE_FORMAT), ("detailed", DETAILED_FORMAT), ("json", JSON_FORMAT), ("unknown", DETAILED_FORMAT)],
    )
    def test_formats(self, log_format, expected):
        setup_logging(log_format=log_format, enable_file=False)
        assert _console_handler().formatter._fmt == expected


class TestFileLogging:
    def test_file_handler_written_to_log_dir(self, tmp_path):
        with patch.object(logging_config, "ENABLE_FILE_LOGGING", True), patch.object(
            logging_config, "LOG_FILE_DIR", str(tmp_path)
        ):
            setup_logging(enable_file=True)

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename == str(tmp_path / "tesvik_portal.log")
        for handler in file_handlers:
            handler.close()
        setup_logging(enable_file=False)


def test_module_levels_applied():
    setup_logging(enable_file=False)
    for module_name, level in MODULE_LOG_LEVELS.items():
        assert logging.getLogger(module_name).level == logging.getLevelName(level)


def test_get_logger_returns_named_logger():
    assert get_logger("tesvik_portal.search.hybrid").name == "tesvik_portal.search.hybrid"
