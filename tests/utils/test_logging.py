"""Tests for the logging module.

Tests cover the setup_logging function, including configuration of log levels,
formatters, and handlers with various output formats.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from unittest.mock import patch

import pytest
from structlog.stdlib import ProcessorFormatter

from vjs_svg_sprite.models.config import LoggingConfig
from vjs_svg_sprite.utils.logging import BYTES_PER_MEGABYTE, setup_logging


@pytest.fixture()
def basic_config() -> LoggingConfig:
    """Create a basic logging configuration with no file output."""
    return LoggingConfig(level="INFO", file=None, format="json", max_size_mb=5, backup_count=3)


@pytest.fixture()
def file_config(tmp_path: Path) -> LoggingConfig:
    """Create a logging configuration with JSON file output."""
    log_file = tmp_path / "logs" / "sprite.log"
    return LoggingConfig(
        level="DEBUG", file=str(log_file), format="json", max_size_mb=2, backup_count=4
    )


def test_setup_logging_basic(basic_config: LoggingConfig) -> None:
    """Test basic logger setup with no file output."""
    logger = setup_logging(basic_config, "test_logger")

    assert logger.name == "test_logger"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.handlers[0].stream == sys.stdout


def test_setup_logging_shares_handler_with_package_logger(basic_config: LoggingConfig) -> None:
    """Test module loggers inside the package write through the same handler."""
    logger = setup_logging(basic_config, "test_logger")
    package_logger = logging.getLogger("vjs_svg_sprite")

    assert package_logger.handlers == logger.handlers
    assert package_logger.level == logging.INFO


def test_setup_logging_replaces_handlers(basic_config: LoggingConfig) -> None:
    """Test repeated setup does not stack handlers."""
    setup_logging(basic_config, "test_logger")
    logger = setup_logging(basic_config, "test_logger")

    assert len(logger.handlers) == 1


def test_setup_logging_json_format(basic_config: LoggingConfig) -> None:
    """Test logger setup with JSON formatter."""
    with patch("structlog.processors.JSONRenderer") as mock_json_renderer:
        logger = setup_logging(basic_config, "test_logger")

        assert mock_json_renderer.call_count == 1
        assert isinstance(logger.handlers[0].formatter, ProcessorFormatter)


def test_setup_logging_console_format(basic_config: LoggingConfig) -> None:
    """Test logger setup with console text formatter."""
    basic_config.format = "console"

    with patch("structlog.dev.ConsoleRenderer") as mock_console_renderer:
        logger = setup_logging(basic_config, "test_logger")

        assert mock_console_renderer.call_count == 1
        assert isinstance(logger.handlers[0].formatter, ProcessorFormatter)


def test_setup_logging_with_file(file_config: LoggingConfig) -> None:
    """Test logger setup with file output."""
    logger = setup_logging(file_config, "test_logger")

    assert len(logger.handlers) == 1
    file_handler = logger.handlers[0]
    assert isinstance(file_handler, RotatingFileHandler)
    assert file_handler.baseFilename == str(file_config.file)
    assert file_handler.maxBytes == file_config.max_size_mb * BYTES_PER_MEGABYTE
    assert file_handler.backupCount == file_config.backup_count

    assert file_config.file is not None
    assert Path(file_config.file).parent.exists()
    file_handler.close()


def test_setup_logging_file_error(file_config: LoggingConfig) -> None:
    """Test falling back to console output when the log directory cannot be created."""
    with patch("pathlib.Path.mkdir", side_effect=PermissionError("Permission denied")):
        with patch("vjs_svg_sprite.utils.logging.handle_startup_error") as mock_startup_error:
            with patch("logging.Logger.error") as mock_error:
                logger = setup_logging(file_config, "test_logger")

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert not isinstance(logger.handlers[0], RotatingFileHandler)

    assert mock_startup_error.call_count == 1
    assert mock_startup_error.call_args[0][0] == "LOGGING_FILE_ERROR"
    assert mock_error.call_count == 1
    error_msg = mock_error.call_args[0][0]
    assert "Failed to set up file logging" in error_msg
    assert "Permission denied" in error_msg


def test_setup_logging_custom_level(basic_config: LoggingConfig) -> None:
    """Test logger setup with custom log level."""
    basic_config.level = "DEBUG"
    assert setup_logging(basic_config, "test_logger").level == logging.DEBUG

    basic_config.level = "ERROR"
    assert setup_logging(basic_config, "test_logger").level == logging.ERROR

    # Unknown levels fall back to INFO
    basic_config.level = "INVALID_LEVEL"
    assert setup_logging(basic_config, "test_logger").level == logging.INFO


def test_structlog_configuration(basic_config: LoggingConfig) -> None:
    """Test structlog configuration."""
    with patch("structlog.configure") as mock_configure:
        setup_logging(basic_config, "test_logger")

        assert mock_configure.call_count == 1
        _, kwargs = mock_configure.call_args
        assert len(kwargs["processors"]) == 9
        assert kwargs["context_class"] is dict
        assert kwargs["cache_logger_on_first_use"] is True
