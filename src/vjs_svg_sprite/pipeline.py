"""End-to-end sprite generation.

Reads every configured icon, optimizes it into the staging directory, adds
it to the sprite assembler, then compiles, optimizes and writes the sprite
and its preview page. Every step runs in order; the first failure aborts the
run, and the staging directory is removed in every case.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from vjs_svg_sprite.exceptions import StagingDirectoryError, chain_exception
from vjs_svg_sprite.models.config import (
    OptimizerConfig,
    SpriteAssemblyConfig,
    SpriteConfig,
    default_icon_optimizer_config,
    default_sprite_optimizer_config,
)
from vjs_svg_sprite.optimizer import SvgOptimizer, optimize_sprite, optimize_temp_icon
from vjs_svg_sprite.sprite.assembler import SpriteAssembler
from vjs_svg_sprite.sprite.resolver import generate_icon_paths
from vjs_svg_sprite.sprite.staging import (
    make_temp_dir_path,
    staging_directory,
    store_icon_in_temp_dir,
)
from vjs_svg_sprite.sprite.writer import persist_svg_sprite_content
from vjs_svg_sprite.utils import file_utils
from vjs_svg_sprite.utils.path_utils import path_resolver

logger = logging.getLogger(__name__)


class PipelineOptions(BaseModel):
    """Per-run settings of the sprite pipeline.

    Every field defaults to a freshly built configuration, so runs never
    share configuration objects.
    """

    sprite_config: SpriteAssemblyConfig = Field(default_factory=SpriteAssemblyConfig)
    icon_optimizer_config: OptimizerConfig = Field(default_factory=default_icon_optimizer_config)
    sprite_optimizer_config: OptimizerConfig = Field(
        default_factory=default_sprite_optimizer_config
    )
    debug: bool = False  # Report every optimized icon at INFO level


def add_temp_file_to_sprite(assembler: SpriteAssembler, file_path: Path) -> None:
    """Add a staged icon to the sprite.

    Args:
        assembler: Sprite assembler.
        file_path: Staged icon.

    Raises:
        StagingDirectoryError: If the staged icon cannot be read back.
        SpriteCompilationError: If the staged icon is not an SVG document.
    """
    try:
        content = file_utils.read_text(file_path)
    except (OSError, UnicodeDecodeError) as e:
        raise chain_exception(
            StagingDirectoryError(
                f"Failed to read staged icon: {file_path}",
                {"path": str(file_path), "error": str(e)},
            ),
            e,
        ) from e

    assembler.add(file_path, content)


def generate_svg_sprite(
    working_dir: str | Path, config: SpriteConfig, options: PipelineOptions | None = None
) -> list[Path]:
    """Generate the SVG sprite described by an icon configuration.

    Args:
        working_dir: Directory icon and output paths are relative to.
        config: Icon configuration.
        options: Per-run settings; defaults are used when omitted.

    Returns:
        Paths of the written files, the sprite first.

    Raises:
        SvgSpriteError: If any step fails. Nothing after the failing step is
            written.
    """
    options = options or PipelineOptions()
    working_dir = path_resolver.normalize_path(working_dir)
    report = logger.info if options.debug else logger.debug

    sprite_config = options.sprite_config.with_output_dir(config.output_dir)
    assembler = SpriteAssembler(sprite_config, working_dir)
    icon_optimizer = SvgOptimizer(options.icon_optimizer_config)
    sprite_optimizer = SvgOptimizer(options.sprite_optimizer_config)

    temp_dir = make_temp_dir_path(working_dir)
    icon_paths = generate_icon_paths(working_dir, temp_dir, config)
    logger.info(f"Generating sprite from {len(icon_paths)} icons in {working_dir}")

    written: list[Path] = []
    with staging_directory(temp_dir):
        for icon in icon_paths:
            optimized = optimize_temp_icon(icon.icon_path, icon_optimizer)
            report(f"Optimized {icon.name} ({icon.icon_path}) to {len(optimized)} characters")

            store_icon_in_temp_dir(icon.temp_icon_path, optimized)
            add_temp_file_to_sprite(assembler, icon.temp_icon_path)

        for artifact in assembler.compile():
            content: str | bytes = artifact.contents
            if artifact.is_svg:
                content = optimize_sprite(artifact.contents, sprite_optimizer)
            written.append(persist_svg_sprite_content(artifact.path, content))

    return written
