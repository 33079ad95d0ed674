"""Test module for file system utilities."""

import json
from pathlib import Path
from typing import Any

import pytest

from vjs_svg_sprite.utils import file_utils
from vjs_svg_sprite.utils.path_utils import path_resolver


class TestFileUtils:
    """Test the file_utils module."""

    def test_read_text(self, tmpdir: Any):
        """Test reading text from a file."""
        temp_file = path_resolver.normalize_path(Path(tmpdir) / "icon.svg")
        content = '<svg xmlns="http://www.w3.org/2000/svg"/>'
        file_utils.write_text(temp_file, content)

        assert file_utils.read_text(temp_file) == content

    def test_read_text_nonexistent_file(self):
        """Test reading text from a nonexistent file."""
        with pytest.raises(FileNotFoundError):
            file_utils.read_text("/nonexistent/file.svg")

    def test_read_json(self, tmp_path: Path):
        """Test reading and parsing JSON from a file."""
        temp_file = tmp_path / "config.json"
        data = {"root-dir": "icons", "icons": {"play": "play.svg"}}
        file_utils.write_json(temp_file, data)

        assert file_utils.read_json(temp_file) == data

    def test_read_json_with_pairs_hook(self, tmp_path: Path):
        """Test the object pairs hook receives every key in order."""
        temp_file = tmp_path / "config.json"
        temp_file.write_text('{"b": 1, "a": 2, "b": 3}', encoding="utf-8")

        result = file_utils.read_json(temp_file, object_pairs_hook=list)

        assert result == [("b", 1), ("a", 2), ("b", 3)]

    def test_read_json_invalid(self, tmp_path: Path):
        """Test reading invalid JSON from a file."""
        temp_file = tmp_path / "invalid.json"
        file_utils.write_text(temp_file, "This is not valid JSON")

        with pytest.raises(json.JSONDecodeError):
            file_utils.read_json(temp_file)

    def test_write_text_creates_parent_directories(self, tmp_path: Path):
        """Test writing text creates missing parents."""
        temp_file = tmp_path / "a" / "b" / "out.svg"
        file_utils.write_text(temp_file, "<svg/>")

        assert temp_file.read_text(encoding="utf-8") == "<svg/>"

    def test_write_text_without_make_dirs(self, tmp_path: Path):
        """Test writing into a missing directory fails without make_dirs."""
        with pytest.raises(FileNotFoundError):
            file_utils.write_text(tmp_path / "missing" / "out.svg", "<svg/>", make_dirs=False)

    def test_write_json_indent(self, tmp_path: Path):
        """Test JSON output uses the requested indentation."""
        temp_file = tmp_path / "out.json"
        file_utils.write_json(temp_file, {"icons": {}}, indent=2)

        assert temp_file.read_text(encoding="utf-8") == '{\n  "icons": {}\n}'

    def test_delete_dir_recursive(self, tmp_path: Path):
        """Test recursive deletion removes a populated directory."""
        target = tmp_path / "staging"
        (target / "nested").mkdir(parents=True)
        (target / "nested" / "icon.svg").write_text("<svg/>", encoding="utf-8")

        file_utils.delete_dir(target, recursive=True)

        assert not target.exists()

    def test_delete_dir_not_empty(self, tmp_path: Path):
        """Test non-recursive deletion refuses a populated directory."""
        target = tmp_path / "staging"
        target.mkdir()
        (target / "icon.svg").write_text("<svg/>", encoding="utf-8")

        with pytest.raises(OSError):
            file_utils.delete_dir(target)

    def test_delete_dir_missing(self, tmp_path: Path):
        """Test deleting a missing directory raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            file_utils.delete_dir(tmp_path / "missing", recursive=True)

    def test_delete_dir_not_a_directory(self, tmp_path: Path):
        """Test deleting a file raises NotADirectoryError."""
        temp_file = tmp_path / "icon.svg"
        temp_file.write_text("<svg/>", encoding="utf-8")

        with pytest.raises(NotADirectoryError):
            file_utils.delete_dir(temp_file, recursive=True)
