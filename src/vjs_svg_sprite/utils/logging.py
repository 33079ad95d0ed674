"""Logging configuration module for the SVG sprite builder.

Provides structured logging setup with support for console and file output
in both JSON and human-readable formats.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

import structlog
from structlog.stdlib import ProcessorFormatter

from vjs_svg_sprite.constants import PROGRAM_NAME
from vjs_svg_sprite.models.config import LoggingConfig
from vjs_svg_sprite.utils.early_error_handler import handle_startup_error
from vjs_svg_sprite.utils.path_utils import path_resolver

BYTES_PER_MEGABYTE = 1024 * 1024


def setup_logging(config: LoggingConfig, name: str = PROGRAM_NAME) -> logging.Logger:
    """Set up logging with the specified configuration.

    The handler is attached to the package logger as well as to ``name`` so
    that module loggers (``logging.getLogger(__name__)``) inside
    ``vjs_svg_sprite`` share the same output.

    Args:
        config: Logging configuration.
        name: Logger name.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    package_logger = logging.getLogger("vjs_svg_sprite")

    # Clear existing handlers
    logger.handlers = []
    package_logger.handlers = []

    level = getattr(logging, config.level.upper(), logging.INFO)
    logger.setLevel(level)
    package_logger.setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if config.format.lower() == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )

    handler: logging.Handler
    if config.file:
        try:
            from vjs_svg_sprite.utils import file_utils

            log_path = path_resolver.normalize_path(config.file)
            file_utils.ensure_dir_exists(log_path.parent)

            handler = RotatingFileHandler(
                config.file,
                maxBytes=config.max_size_mb * BYTES_PER_MEGABYTE,
                backupCount=config.backup_count,
            )
        except OSError as e:
            error_msg = f"Failed to set up file logging: {e}"
            handle_startup_error("LOGGING_FILE_ERROR", error_msg, {"log_file": str(config.file)})

            # Fall back to console logging if file logging fails
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(formatter)
            handler.setLevel(level)
            logger.addHandler(handler)
            if package_logger is not logger:
                package_logger.addHandler(handler)

            logger.error(error_msg)
            return logger
    else:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(formatter)
    handler.setLevel(level)
    logger.addHandler(handler)
    if package_logger is not logger:
        package_logger.addHandler(handler)

    return logger
