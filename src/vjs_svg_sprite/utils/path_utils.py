"""Path utility module for the SVG sprite builder.

Provides centralized path resolution so that the pipeline, the CLI and the
tests agree on where configuration files, packaged templates and per-run
staging directories live.
"""

import uuid
from pathlib import Path

from vjs_svg_sprite.constants import TEMP_DIR_PREFIX
from vjs_svg_sprite.exceptions import ConfigFileNotFoundError


class PathResolver:
    """Centralized utility for path resolution and management.

    Attributes:
        package_root: Directory of the installed ``vjs_svg_sprite`` package
        templates_dir: Directory holding the packaged Jinja2 templates
    """

    def __init__(self) -> None:
        """Initialize the path resolver from the location of this module."""
        self.package_root = Path(__file__).resolve().parent.parent
        self.templates_dir = self.package_root / "templates"

    def get_template_path(self, template_name: str) -> Path:
        """Get the path to a packaged template.

        Args:
            template_name: File name of the template

        Returns:
            Path to the template inside the package.
        """
        return self.templates_dir / template_name

    def get_staging_dir(self, working_dir: str | Path) -> Path:
        """Get a unique staging directory path below the working directory.

        The directory name embeds a random UUID so that concurrent runs against
        the same working directory never share scratch space. The directory is
        not created.

        Args:
            working_dir: Directory the pipeline runs in

        Returns:
            Path to the (not yet existing) staging directory.
        """
        return self.normalize_path(working_dir) / f"{TEMP_DIR_PREFIX}{uuid.uuid4()}"

    def resolve_from(self, base_dir: str | Path, *parts: str | Path) -> Path:
        """Join path fragments onto a base directory.

        Absolute fragments replace everything before them, matching
        ``os.path.join`` semantics.

        Args:
            base_dir: Base directory
            *parts: Relative or absolute fragments

        Returns:
            The joined path.
        """
        return self.normalize_path(base_dir).joinpath(*parts)

    def normalize_path(self, path: str | Path) -> Path:
        """Convert a string path to a Path object.

        Args:
            path: String or Path object

        Returns:
            A Path object.
        """
        return Path(path) if isinstance(path, str) else path

    def ensure_dir_exists(self, path: str | Path) -> Path:
        """Ensure a directory exists, creating it if necessary.

        Args:
            path: Directory path

        Returns:
            Path to the directory.
        """
        dir_path = self.normalize_path(path)
        dir_path.mkdir(exist_ok=True, parents=True)
        return dir_path


# Create a global instance for easy import
path_resolver = PathResolver()


def validate_config_path(config_path: str | Path, cwd: str | Path | None = None) -> Path:
    """Validate and resolve the configuration file path.

    Relative paths are resolved against ``cwd`` (the current directory when
    omitted).

    Args:
        config_path: Path to the configuration file
        cwd: Directory relative paths are resolved against

    Returns:
        Resolved Path to the configuration file

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist
    """
    base_dir = path_resolver.normalize_path(cwd) if cwd is not None else Path.cwd()
    resolved_path = path_resolver.resolve_from(base_dir, config_path)

    if not resolved_path.is_file():
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {resolved_path}",
            {"path": str(resolved_path), "cwd": str(base_dir)},
        )

    return resolved_path
