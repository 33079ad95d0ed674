"""File system abstraction for the SVG sprite builder.

Provides a consistent interface for the file operations the pipeline needs:
reading icons and configuration, writing staged icons and compiled artifacts,
and removing the staging directory. Errors are the standard ``OSError``
family; callers translate them into domain exceptions.
"""

import json
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Any

from vjs_svg_sprite.utils.path_utils import path_resolver

# Type aliases for clarity and documentation
PathLike = str | Path
JsonData = dict[str, Any] | list[Any]


def read_text(file_path: PathLike) -> str:
    """Read UTF-8 text content from a file.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        The text content of the file

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
        UnicodeDecodeError: If the file content cannot be decoded as text
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, encoding="utf-8") as f:
        return f.read()


def read_json(
    file_path: PathLike,
    object_pairs_hook: Callable[[list[tuple[str, Any]]], Any] | None = None,
) -> JsonData:
    """Read and parse JSON content from a file.

    Args:
        file_path: Path to the JSON file (string or Path object)
        object_pairs_hook: Optional hook forwarded to ``json.load``

    Returns:
        The parsed JSON data as a dictionary or list

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file content is not valid JSON
        PermissionError: If the file cannot be read due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, encoding="utf-8") as f:
        return json.load(f, object_pairs_hook=object_pairs_hook)


def write_text(file_path: PathLike, content: str, make_dirs: bool = True) -> None:
    """Write text content to a file, replacing any existing content.

    Args:
        file_path: Path to the file (string or Path object)
        content: Text content to write
        make_dirs: Whether to create parent directories if they don't exist

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)

    with open(normalized_path, "w", encoding="utf-8") as f:
        f.write(content)


def write_bytes(file_path: PathLike, content: bytes, make_dirs: bool = True) -> None:
    """Write binary content to a file, replacing any existing content.

    Args:
        file_path: Path to the file (string or Path object)
        content: Binary content to write
        make_dirs: Whether to create parent directories if they don't exist

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)

    with open(normalized_path, "wb") as f:
        f.write(content)


def write_json(
    file_path: PathLike, data: JsonData, make_dirs: bool = True, indent: int = 2
) -> None:
    """Write data as JSON to a file.

    Args:
        file_path: Path to the output JSON file (string or Path object)
        data: Data to be serialized as JSON (dict or list)
        make_dirs: Whether to create parent directories if they don't exist
        indent: Number of spaces for indentation in the JSON output

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
        TypeError: If the data contains objects that cannot be serialized to JSON
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)

    with open(normalized_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


def ensure_dir_exists(dir_path: PathLike) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Wrapper around path_resolver.ensure_dir_exists for API consistency.

    Args:
        dir_path: Directory path (string or Path object)

    Returns:
        Path to the directory

    Raises:
        PermissionError: If the directory cannot be created due to permissions
    """
    return path_resolver.ensure_dir_exists(dir_path)


def delete_dir(dir_path: PathLike, recursive: bool = False) -> None:
    """Delete a directory.

    Args:
        dir_path: Path to the directory (string or Path object)
        recursive: Whether to recursively delete the directory and its contents

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
        OSError: If the directory is not empty and recursive is False
        PermissionError: If the directory cannot be deleted due to permissions
    """
    normalized_path = path_resolver.normalize_path(dir_path)

    if not normalized_path.exists():
        raise FileNotFoundError(f"Directory not found: {normalized_path}")

    if not normalized_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {normalized_path}")

    if recursive:
        shutil.rmtree(normalized_path)
    else:
        normalized_path.rmdir()  # Raises if directory is not empty
