"""Early error handler for failures before or outside logging.

The CLI reports fatal pipeline errors here so they reach stderr even when
logging is routed to a file or was never configured.
"""

import sys
from datetime import datetime
from typing import Any


def handle_startup_error(
    error_type: str, message: str, details: dict[str, Any] | None = None
) -> None:
    """Write a formatted error message to stderr.

    Args:
        error_type: Type of error (e.g., "ConfigParseError")
        message: Main error message
        details: Optional dictionary of additional error details
    """
    timestamp = datetime.now().isoformat()

    sys.stderr.write(f"\n[{timestamp}] {error_type}: {message}\n")

    if details:
        sys.stderr.write("Details:\n")
        for key, value in details.items():
            sys.stderr.write(f"  {key}: {value}\n")

    sys.stderr.flush()


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    sys.stderr.write("\n\nInterrupted by user (Ctrl+C)\n")
    sys.stderr.flush()


def handle_unexpected_error(error: Exception) -> None:
    """Handle errors outside the domain exception hierarchy.

    Args:
        error: The unexpected exception
    """
    timestamp = datetime.now().isoformat()
    sys.stderr.write(f"\n[{timestamp}] Unexpected Error: {type(error).__name__}: {error}\n")
    sys.stderr.write("This is likely a bug. Please report it with the full error details.\n")
    sys.stderr.flush()
