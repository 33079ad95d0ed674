"""Per-run staging directory.

Optimized icons are written to a scratch directory below the working
directory before they are handed to the sprite assembler. Every run gets its
own directory, named with a random UUID, and removes it when it ends.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from vjs_svg_sprite.exceptions import StagingDirectoryError, chain_exception
from vjs_svg_sprite.utils import file_utils
from vjs_svg_sprite.utils.path_utils import path_resolver

logger = logging.getLogger(__name__)


def make_temp_dir_path(working_dir: str | Path) -> Path:
    """Build a staging directory path unique to this run.

    Args:
        working_dir: Directory the pipeline runs in.

    Returns:
        ``working_dir / "vjs-sprite-tmp_<uuid4>"``; the directory is not created.
    """
    return path_resolver.get_staging_dir(working_dir)


def create_temp_dir(temp_dir: str | Path) -> Path:
    """Create the staging directory and any missing parents.

    Creating a directory that already exists is not an error.

    Args:
        temp_dir: Staging directory.

    Returns:
        The staging directory path.

    Raises:
        StagingDirectoryError: If the directory cannot be created.
    """
    path = path_resolver.normalize_path(temp_dir)
    try:
        file_utils.ensure_dir_exists(path)
    except OSError as e:
        raise chain_exception(
            StagingDirectoryError(
                f"Failed to create staging directory: {path}", {"path": str(path), "error": str(e)}
            ),
            e,
        ) from e

    logger.debug(f"Created staging directory {path}")
    return path


def delete_temp_dir(temp_dir: str | Path) -> None:
    """Remove the staging directory and everything in it.

    Args:
        temp_dir: Staging directory.

    Raises:
        StagingDirectoryError: If the directory does not exist or cannot be removed.
    """
    path = path_resolver.normalize_path(temp_dir)
    try:
        file_utils.delete_dir(path, recursive=True)
    except OSError as e:
        raise chain_exception(
            StagingDirectoryError(
                f"Failed to remove staging directory: {path}", {"path": str(path), "error": str(e)}
            ),
            e,
        ) from e

    logger.debug(f"Removed staging directory {path}")


def store_icon_in_temp_dir(file_path: str | Path, content: str) -> None:
    """Write an optimized icon into the staging directory.

    Args:
        file_path: Staged icon path.
        content: Optimized SVG markup.

    Raises:
        StagingDirectoryError: If the file cannot be written.
    """
    path = path_resolver.normalize_path(file_path)
    try:
        file_utils.write_text(path, content, make_dirs=False)
    except OSError as e:
        raise chain_exception(
            StagingDirectoryError(
                f"Failed to stage icon: {path}", {"path": str(path), "error": str(e)}
            ),
            e,
        ) from e


@contextmanager
def staging_directory(temp_dir: str | Path) -> Iterator[Path]:
    """Create the staging directory for the duration of a ``with`` block.

    The directory is removed when the block exits, whether it completed or
    raised. A removal failure is raised when the block completed; when the
    block raised, the removal failure is logged and the original error
    propagates.

    Args:
        temp_dir: Staging directory.

    Yields:
        The staging directory path.

    Raises:
        StagingDirectoryError: If the directory cannot be created, or cannot
            be removed after the block completed.
    """
    path = create_temp_dir(temp_dir)
    try:
        yield path
    except BaseException:
        try:
            delete_temp_dir(path)
        except StagingDirectoryError as e:
            logger.error(f"{e.message}: {e.details.get('error')}")
        raise
    delete_temp_dir(path)
