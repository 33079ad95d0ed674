"""Declarative SVG optimizer.

Runs a configured list of plugins over a parsed document and serializes the
result. The same optimizer type serves both pipelines: the per-icon pass
applied before assembly and the sprite-wide pass applied to the compiled
sprite.
"""

import logging
from pathlib import Path

from vjs_svg_sprite.exceptions import (
    IconNotFoundError,
    IconReadError,
    InvalidConfigError,
    SvgParseError,
    chain_exception,
)
from vjs_svg_sprite.models.config import OptimizerConfig
from vjs_svg_sprite.optimizer.document import parse_svg, serialize_svg
from vjs_svg_sprite.optimizer.plugins import PLUGINS, Plugin
from vjs_svg_sprite.utils import file_utils

logger = logging.getLogger(__name__)


class SvgOptimizer:
    """Plugin pipeline built from an OptimizerConfig.

    Attributes:
        config: The optimizer configuration
        plugins: Resolved ``(name, plugin, params)`` triples in execution order
    """

    def __init__(self, config: OptimizerConfig) -> None:
        """Resolve every configured plugin.

        Args:
            config: The optimizer configuration.

        Raises:
            InvalidConfigError: If a plugin name is not known.
        """
        self.config = config
        self.plugins: list[tuple[str, Plugin, dict]] = []

        for spec in config.plugins:
            plugin = PLUGINS.get(spec.name)
            if plugin is None:
                raise InvalidConfigError(
                    f"Unknown optimizer plugin: {spec.name}",
                    {"plugin": spec.name, "available": sorted(PLUGINS)},
                )
            self.plugins.append((spec.name, plugin, spec.params))

    def optimize(self, content: str) -> str:
        """Optimize SVG markup.

        Args:
            content: SVG markup.

        Returns:
            The optimized markup.

        Raises:
            SvgParseError: If the markup is not well-formed.
        """
        document = parse_svg(content)
        for name, plugin, params in self.plugins:
            logger.debug(f"Applying optimizer plugin {name}")
            plugin(document, params)

        js2svg = self.config.js2svg
        return serialize_svg(
            document,
            pretty=js2svg.pretty,
            indent=js2svg.indent,
            final_newline=js2svg.final_newline,
        )


def optimize_temp_icon(icon_path: str | Path, optimizer: SvgOptimizer) -> str:
    """Read an icon source file and run the per-icon pipeline on it.

    Args:
        icon_path: Path of the icon source file.
        optimizer: Per-icon optimizer.

    Returns:
        Optimized SVG markup.

    Raises:
        IconNotFoundError: If the file does not exist.
        IconReadError: If the file cannot be read or is not UTF-8.
        SvgParseError: If the file is not well-formed SVG.
    """
    path = Path(icon_path)

    try:
        content = file_utils.read_text(path)
    except FileNotFoundError as e:
        raise chain_exception(
            IconNotFoundError(f"Icon source file not found: {path}", {"path": str(path)}), e
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise chain_exception(
            IconReadError(
                f"Failed to read icon source file: {path}", {"path": str(path), "error": str(e)}
            ),
            e,
        ) from e

    try:
        return optimizer.optimize(content)
    except SvgParseError as e:
        raise chain_exception(
            SvgParseError(f"Icon is not valid SVG: {path}", {"path": str(path), **e.details}), e
        ) from e


def optimize_sprite(contents: bytes, optimizer: SvgOptimizer) -> str:
    """Run the sprite-wide pipeline on a compiled sprite.

    Args:
        contents: UTF-8 encoded sprite markup.
        optimizer: Sprite optimizer.

    Returns:
        Optimized sprite markup.

    Raises:
        SvgParseError: If the sprite is not UTF-8 or not well-formed SVG.
    """
    try:
        content = contents.decode("utf-8")
    except UnicodeDecodeError as e:
        raise chain_exception(
            SvgParseError("Sprite is not valid UTF-8", {"error": str(e)}), e
        ) from e

    return optimizer.optimize(content)
