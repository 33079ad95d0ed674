"""Models passed between the stages of the sprite pipeline."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from vjs_svg_sprite.constants import SVG_FILE_EXTENSION


class ResolvedIconPath(BaseModel):
    """Where one configured icon is read from and staged to."""

    model_config = ConfigDict(frozen=True)

    name: str  # Logical icon name from the configuration
    icon_path: Path  # Source SVG file
    temp_icon_path: Path  # Optimized copy inside the staging directory


class CompiledArtifact(BaseModel):
    """A file produced by the sprite assembler, not yet written to disk."""

    model_config = ConfigDict(frozen=True)

    contents: bytes
    path: Path

    @property
    def is_svg(self) -> bool:
        """Whether the artifact is an SVG document and goes through the sprite optimizer."""
        return self.path.suffix.lower() == SVG_FILE_EXTENSION
