"""Writes compiled artifacts to their destinations."""

import logging
from pathlib import Path

from vjs_svg_sprite.exceptions import OutputWriteError, chain_exception
from vjs_svg_sprite.utils import file_utils
from vjs_svg_sprite.utils.path_utils import path_resolver

logger = logging.getLogger(__name__)


def persist_svg_sprite_content(content_path: str | Path, content: str | bytes) -> Path:
    """Write a sprite or preview page, replacing any existing file.

    Missing parent directories are created.

    Args:
        content_path: Destination file.
        content: Markup to write; text is encoded as UTF-8.

    Returns:
        The destination path.

    Raises:
        OutputWriteError: If the file or its parent directories cannot be written.
    """
    path = path_resolver.normalize_path(content_path)
    try:
        if isinstance(content, bytes):
            file_utils.write_bytes(path, content)
        else:
            file_utils.write_text(path, content)
    except OSError as e:
        raise chain_exception(
            OutputWriteError(f"Failed to write {path}", {"path": str(path), "error": str(e)}), e
        ) from e

    logger.info(f"Wrote {path}")
    return path
