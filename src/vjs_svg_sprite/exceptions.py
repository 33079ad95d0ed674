"""Custom exception hierarchy for the SVG sprite builder.

This module defines domain-specific exceptions so that every failure in the
pipeline reaches the command line as an explicit, human-readable error.

Exception Hierarchy:
    SvgSpriteError (Base)
    ├── ConfigurationError
    │   ├── ConfigFileNotFoundError
    │   ├── ConfigParseError
    │   └── InvalidConfigError
    ├── IconError
    │   ├── IconNotFoundError
    │   └── IconReadError
    ├── SvgParseError
    ├── StagingDirectoryError
    ├── SpriteCompilationError
    └── OutputWriteError
"""

from typing import Any


# Base Exception
class SvgSpriteError(Exception):
    """Base exception for all sprite builder errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(SvgSpriteError):
    """Base exception for configuration-related errors."""
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when a configuration file is missing or cannot be read.

    Example:
        raise ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": "vjs-icons-config.json", "cwd": "/home/user/project"}
        )
    """
    pass


class ConfigParseError(ConfigurationError):
    """Raised when a configuration file is not valid JSON/YAML or has the wrong shape.

    Example:
        raise ConfigParseError(
            "Invalid icon entry",
            {"icon": "home", "value": 42}
        )
    """
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when a parsed configuration cannot be used as given.

    Example:
        raise InvalidConfigError(
            "Unknown optimizer plugin",
            {"plugin": "removeEverything"}
        )
    """
    pass


# Icon Exceptions
class IconError(SvgSpriteError):
    """Base exception for errors reading individual icon files."""
    pass


class IconNotFoundError(IconError):
    """Raised when a resolved icon source path does not exist.

    Example:
        raise IconNotFoundError(
            "Icon source file not found",
            {"path": "/project/icons/home.svg"}
        )
    """
    pass


class IconReadError(IconError):
    """Raised when an icon source exists but cannot be read or decoded."""
    pass


class SvgParseError(SvgSpriteError):
    """Raised when SVG markup cannot be parsed.

    Example:
        raise SvgParseError(
            "Malformed SVG document",
            {"line": 3, "column": 12}
        )
    """
    pass


class StagingDirectoryError(SvgSpriteError):
    """Raised when the staging directory cannot be created or removed.

    Example:
        raise StagingDirectoryError(
            "Failed to remove staging directory",
            {"path": "/project/vjs-sprite-tmp_1f0c...", "error": "Permission denied"}
        )
    """
    pass


class SpriteCompilationError(SvgSpriteError):
    """Raised when the sprite or its preview page cannot be compiled.

    Example:
        raise SpriteCompilationError(
            "Preview template not found",
            {"template": "template/sprite.html"}
        )
    """
    pass


class OutputWriteError(SvgSpriteError):
    """Raised when a compiled artifact cannot be written to its destination.

    Example:
        raise OutputWriteError(
            "Failed to write sprite",
            {"path": "/readonly/vjs-sprite-icons.svg", "error": "Permission denied"}
        )
    """
    pass


# Utility function for exception chaining
def chain_exception(new_exception: SvgSpriteError, cause: Exception) -> SvgSpriteError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            content = file_utils.read_text(path)
        except OSError as e:
            raise chain_exception(
                IconReadError("Failed to read icon", {"path": str(path)}),
                e
            )
    """
    new_exception.__cause__ = cause
    return new_exception
