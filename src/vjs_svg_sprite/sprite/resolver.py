"""Icon path resolution.

Maps every configured icon to the file it is read from and the file its
optimized copy is staged to.
"""

import logging
from os.path import normcase
from pathlib import Path

from vjs_svg_sprite.constants import STAGED_ICON_SUFFIX
from vjs_svg_sprite.exceptions import InvalidConfigError
from vjs_svg_sprite.models.config import IconFile, SpriteConfig
from vjs_svg_sprite.models.sprite import ResolvedIconPath
from vjs_svg_sprite.utils.path_utils import path_resolver

logger = logging.getLogger(__name__)


def _staging_key(path: Path) -> str:
    # Windows paths compare case-insensitively
    return normcase(str(path))


def generate_icon_paths(
    working_dir: str | Path, temp_dir: str | Path, config: SpriteConfig
) -> list[ResolvedIconPath]:
    """Resolve the source and staging path of every configured icon.

    An icon given as an object uses its own ``root-dir`` when set and the
    top-level ``root-dir`` otherwise. Icons keep the order of the
    configuration file.

    Args:
        working_dir: Directory icon paths are relative to.
        temp_dir: Staging directory.
        config: Icon configuration.

    Returns:
        One ResolvedIconPath per icon.

    Raises:
        InvalidConfigError: If an icon name cannot be used as a staged file
            name or two names map to the same staged file.
    """
    temp_dir = path_resolver.normalize_path(temp_dir)
    resolved: list[ResolvedIconPath] = []
    staged: dict[str, str] = {}

    for name, source in config.icons.items():
        if isinstance(source, IconFile):
            file_dir = source.root_dir or config.root_dir
            file_name = source.file
        else:
            file_dir = config.root_dir
            file_name = source

        temp_icon_path = temp_dir / f"{name}{STAGED_ICON_SUFFIX}"
        if temp_icon_path.parent != temp_dir:
            raise InvalidConfigError(
                f"Icon name cannot be used as a file name: {name}", {"icon": name}
            )

        key = _staging_key(temp_icon_path)
        if key in staged:
            raise InvalidConfigError(
                f"Icons '{staged[key]}' and '{name}' would be staged to the same file",
                {"icons": [staged[key], name], "path": str(temp_icon_path)},
            )
        staged[key] = name

        icon_path = path_resolver.resolve_from(working_dir, file_dir, file_name)
        logger.debug(f"Resolved icon {name} to {icon_path}")
        resolved.append(
            ResolvedIconPath(name=name, icon_path=icon_path, temp_icon_path=temp_icon_path)
        )

    return resolved
