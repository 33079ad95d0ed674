"""Tests for custom exception hierarchy."""

import pytest

from vjs_svg_sprite.exceptions import (
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigurationError,
    IconError,
    IconNotFoundError,
    IconReadError,
    InvalidConfigError,
    OutputWriteError,
    SpriteCompilationError,
    StagingDirectoryError,
    SvgParseError,
    SvgSpriteError,
    chain_exception,
)


class TestSvgSpriteError:
    """Test base exception class."""

    def test_base_exception_with_message_only(self):
        """Test creating exception with just a message."""
        exc = SvgSpriteError("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.details == {}

    def test_base_exception_with_details(self):
        """Test creating exception with message and details."""
        details = {"path": "icons/home.svg", "line": 3}
        exc = SvgSpriteError("Test error", details)
        assert exc.message == "Test error"
        assert exc.details == details
        assert str(exc) == "Test error - Details: {'path': 'icons/home.svg', 'line': 3}"

    def test_inheritance_chain(self):
        """Test that all exceptions inherit from base."""
        exc = InvalidConfigError("Config error")
        assert isinstance(exc, ConfigurationError)
        assert isinstance(exc, SvgSpriteError)
        assert isinstance(exc, Exception)


class TestConfigurationExceptions:
    """Test configuration-related exceptions."""

    def test_config_file_not_found_error(self):
        """Test ConfigFileNotFoundError with lookup context."""
        exc = ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": "vjs-icons-config.json", "cwd": "/home/user/project"},
        )
        assert isinstance(exc, ConfigurationError)
        assert exc.details["path"] == "vjs-icons-config.json"

    def test_config_parse_error(self):
        """Test ConfigParseError with position."""
        exc = ConfigParseError("Invalid JSON", {"line": 4, "column": 7})
        assert isinstance(exc, ConfigurationError)
        assert exc.details["line"] == 4

    def test_invalid_config_error(self):
        """Test InvalidConfigError with context."""
        exc = InvalidConfigError("Unknown optimizer plugin", {"plugin": "removeEverything"})
        assert exc.details["plugin"] == "removeEverything"


class TestPipelineExceptions:
    """Test exceptions raised by the pipeline stages."""

    @pytest.mark.parametrize("exc_class", [IconNotFoundError, IconReadError])
    def test_icon_errors(self, exc_class: type[IconError]):
        """Test icon errors share the IconError base."""
        exc = exc_class("Icon problem", {"path": "/project/icons/home.svg"})
        assert isinstance(exc, IconError)
        assert isinstance(exc, SvgSpriteError)

    @pytest.mark.parametrize(
        "exc_class",
        [SvgParseError, StagingDirectoryError, SpriteCompilationError, OutputWriteError],
    )
    def test_stage_errors_are_not_config_errors(self, exc_class: type[SvgSpriteError]):
        """Test stage errors sit directly below the base class."""
        exc = exc_class("Stage failed")
        assert isinstance(exc, SvgSpriteError)
        assert not isinstance(exc, ConfigurationError)
        assert not isinstance(exc, IconError)


class TestExceptionChaining:
    """Test exception chaining utility."""

    def test_chain_exception(self):
        """Test chaining exceptions for better debugging."""
        original = OSError("Disk full")
        new_exc = OutputWriteError("Failed to write sprite", {"path": "dist/sprite.svg"})

        chained = chain_exception(new_exc, original)

        assert chained is new_exc
        assert chained.__cause__ is original

    def test_exception_chain_in_practice(self):
        """Test practical exception chaining scenario."""
        try:
            raise PermissionError("Permission denied")
        except PermissionError as e:
            with pytest.raises(StagingDirectoryError) as exc_info:
                raise chain_exception(
                    StagingDirectoryError(
                        "Failed to remove staging directory", {"path": "/tmp/x"}
                    ),
                    e,
                ) from e

        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert exc_info.value.details["path"] == "/tmp/x"

    def test_exception_hierarchy_for_handlers(self):
        """Test a single handler for the base class catches every stage."""
        caught = []
        for exc in [
            ConfigParseError("bad json"),
            IconNotFoundError("missing"),
            SpriteCompilationError("bad icon"),
        ]:
            try:
                raise exc
            except SvgSpriteError as e:
                caught.append(type(e).__name__)

        assert caught == ["ConfigParseError", "IconNotFoundError", "SpriteCompilationError"]
