"""Command line interface.

``vjs-svg-sprite create [configFile]`` writes a starter icon configuration;
``vjs-svg-sprite generate configFile`` builds the sprite it describes.
"""

import argparse
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from vjs_svg_sprite import __version__
from vjs_svg_sprite.constants import (
    CONFIG_TEMPLATE,
    DEFAULT_CONFIG_FILENAME,
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    JSON_INDENT,
    PROGRAM_NAME,
)
from vjs_svg_sprite.exceptions import (
    InvalidConfigError,
    OutputWriteError,
    SvgSpriteError,
    chain_exception,
)
from vjs_svg_sprite.models.config import (
    LoggingConfig,
    OptimizerConfig,
    SpriteAssemblyConfig,
    default_icon_optimizer_config,
    default_sprite_optimizer_config,
    format_validation_errors,
    load_override_file,
    merge_override,
    parse_config_file,
)
from vjs_svg_sprite.pipeline import PipelineOptions, generate_svg_sprite
from vjs_svg_sprite.utils import file_utils, path_resolver, validate_config_path
from vjs_svg_sprite.utils.early_error_handler import (
    handle_keyboard_interrupt,
    handle_startup_error,
    handle_unexpected_error,
)
from vjs_svg_sprite.utils.logging import setup_logging

ModelT = TypeVar("ModelT", bound=BaseModel)

logger = logging.getLogger(PROGRAM_NAME)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the ``create`` and ``generate`` subcommands."""
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME, description="Build an SVG symbol sprite from individual icons"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    create = subparsers.add_parser("create", help="create a config file")
    create.add_argument(
        "config_file",
        metavar="configFile",
        nargs="?",
        default=DEFAULT_CONFIG_FILENAME,
        help=f"the config file used to build the svg sprite (default: {DEFAULT_CONFIG_FILENAME})",
    )

    generate = subparsers.add_parser("generate", help="generate the svg sprite")
    generate.add_argument(
        "config_file", metavar="configFile", help="the config file used to build the svg sprite"
    )
    generate.add_argument(
        "--svgSpriteConfigFile",
        dest="svg_sprite_config_file",
        help="the config file that overrides the default svg-sprite configuration",
    )
    generate.add_argument(
        "--svgoConfigFile",
        dest="svgo_config_file",
        help="the config file that overrides the default svgo configuration applied to each icon",
    )
    generate.add_argument(
        "--svgoCleanSpriteConfigFile",
        dest="svgo_clean_sprite_config_file",
        help="the config file that overrides the default svgo configuration applied to the sprite",
    )
    generate.add_argument(
        "--debug", action="store_true", default=False, help="activate the debug mode"
    )
    return parser


def create_config_file(config_file: str | Path, cwd: str | Path | None = None) -> Path:
    """Write the starter icon configuration.

    An existing file is overwritten.

    Args:
        config_file: Destination, relative to ``cwd``.
        cwd: Base directory; the current directory when omitted.

    Returns:
        The written path.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    base_dir = path_resolver.normalize_path(cwd) if cwd is not None else Path.cwd()
    path = path_resolver.resolve_from(base_dir, config_file)

    try:
        file_utils.write_json(path, CONFIG_TEMPLATE, make_dirs=False, indent=JSON_INDENT)
    except OSError as e:
        raise chain_exception(
            OutputWriteError(
                f"Failed to write configuration file: {path}", {"path": str(path), "error": str(e)}
            ),
            e,
        ) from e

    logger.info(f"Created configuration file {path}")
    return path


def apply_override(defaults: ModelT, override_file: str | Path | None) -> ModelT:
    """Deep-merge an override file over a default configuration.

    Args:
        defaults: Default configuration.
        override_file: Override document; None returns ``defaults`` unchanged.

    Returns:
        The merged configuration.

    Raises:
        ConfigFileNotFoundError: If the override file is missing.
        ConfigParseError: If the override file has invalid syntax.
        InvalidConfigError: If the merged document is not a valid configuration.
    """
    if not override_file:
        return defaults

    override = load_override_file(override_file)
    merged = merge_override(defaults.model_dump(by_alias=True), override)
    try:
        result = type(defaults).model_validate(merged)
    except ValidationError as e:
        raise chain_exception(
            InvalidConfigError(
                f"Invalid override file: {override_file}",
                {"path": str(override_file), "errors": format_validation_errors(e)},
            ),
            e,
        ) from e

    logger.debug(f"Applied override file {override_file}")
    return result


def build_pipeline_options(
    args: argparse.Namespace, cwd: str | Path | None = None
) -> PipelineOptions:
    """Build the pipeline options for a ``generate`` invocation.

    Override file paths are relative to ``cwd``.

    Args:
        args: Parsed ``generate`` arguments.
        cwd: Base directory; the current directory when omitted.

    Returns:
        Options with every override file applied.
    """
    base_dir = path_resolver.normalize_path(cwd) if cwd is not None else Path.cwd()

    def override_path(value: str | None) -> Path | None:
        return path_resolver.resolve_from(base_dir, value) if value else None

    sprite_config: SpriteAssemblyConfig = apply_override(
        SpriteAssemblyConfig(), override_path(args.svg_sprite_config_file)
    )
    icon_optimizer_config: OptimizerConfig = apply_override(
        default_icon_optimizer_config(), override_path(args.svgo_config_file)
    )
    sprite_optimizer_config: OptimizerConfig = apply_override(
        default_sprite_optimizer_config(), override_path(args.svgo_clean_sprite_config_file)
    )
    return PipelineOptions(
        sprite_config=sprite_config,
        icon_optimizer_config=icon_optimizer_config,
        sprite_optimizer_config=sprite_optimizer_config,
        debug=args.debug,
    )


def run_generate(args: argparse.Namespace, cwd: str | Path | None = None) -> list[Path]:
    """Run the ``generate`` subcommand.

    Args:
        args: Parsed ``generate`` arguments.
        cwd: Working directory; the current directory when omitted.

    Returns:
        Paths of the written files.
    """
    working_dir = path_resolver.normalize_path(cwd) if cwd is not None else Path.cwd()
    config_path = validate_config_path(args.config_file, working_dir)
    config = parse_config_file(config_path)
    if config is None:
        raise InvalidConfigError("No configuration file given", {"path": str(args.config_file)})

    written = generate_svg_sprite(working_dir, config, build_pipeline_options(args, working_dir))
    for path in written:
        logger.info(f"Generated {path}")
    return written


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``vjs-svg-sprite`` command.

    Args:
        argv: Arguments without the program name; ``sys.argv`` when omitted.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    debug = getattr(args, "debug", False)
    setup_logging(LoggingConfig(level="DEBUG" if debug else "INFO"))

    try:
        if args.command == "create":
            create_config_file(args.config_file)
        else:
            run_generate(args)
    except SvgSpriteError as e:
        logger.debug("Run failed", exc_info=e)
        handle_startup_error(type(e).__name__, e.message, e.details)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=e)
        handle_unexpected_error(e)
        return EXIT_FAILURE

    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
