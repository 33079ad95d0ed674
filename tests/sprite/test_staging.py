"""Tests for the staging directory lifecycle."""

from pathlib import Path
from unittest.mock import patch

import pytest

from vjs_svg_sprite.constants import TEMP_DIR_PREFIX
from vjs_svg_sprite.exceptions import StagingDirectoryError
from vjs_svg_sprite.sprite.staging import (
    create_temp_dir,
    delete_temp_dir,
    make_temp_dir_path,
    staging_directory,
    store_icon_in_temp_dir,
)


class TestTempDir:
    """Test creating and removing the staging directory."""

    def test_make_temp_dir_path(self, tmp_path: Path):
        """Test each run gets its own directory name below the working directory."""
        first = make_temp_dir_path(tmp_path)
        second = make_temp_dir_path(tmp_path)

        assert first.parent == tmp_path
        assert first.name.startswith(TEMP_DIR_PREFIX)
        assert first != second
        assert not first.exists()

    def test_create_is_idempotent(self, tmp_path: Path):
        """Test creating an existing directory succeeds."""
        temp_dir = tmp_path / "a" / "stage"

        assert create_temp_dir(temp_dir) == temp_dir
        assert create_temp_dir(temp_dir) == temp_dir
        assert temp_dir.is_dir()

    def test_create_failure(self, tmp_path: Path):
        """Test creation failures raise StagingDirectoryError."""
        with patch(
            "vjs_svg_sprite.utils.file_utils.ensure_dir_exists",
            side_effect=PermissionError("Permission denied"),
        ):
            with pytest.raises(StagingDirectoryError) as exc_info:
                create_temp_dir(tmp_path / "stage")

        assert "Permission denied" in exc_info.value.details["error"]

    def test_delete_populated(self, tmp_path: Path):
        """Test deletion removes staged icons too."""
        temp_dir = create_temp_dir(tmp_path / "stage")
        (temp_dir / "home.svg").write_text("<svg/>", encoding="utf-8")

        delete_temp_dir(temp_dir)

        assert not temp_dir.exists()

    def test_delete_missing(self, tmp_path: Path):
        """Test deleting a directory that does not exist is an error."""
        with pytest.raises(StagingDirectoryError) as exc_info:
            delete_temp_dir(tmp_path / "stage")

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)


class TestStoreIcon:
    """Test staging optimized icons."""

    def test_store(self, tmp_path: Path):
        """Test the icon is written as UTF-8."""
        temp_dir = create_temp_dir(tmp_path / "stage")

        store_icon_in_temp_dir(temp_dir / "home.svg", "<svg><title>café</title></svg>")

        assert (temp_dir / "home.svg").read_text(encoding="utf-8") == (
            "<svg><title>café</title></svg>"
        )

    def test_store_without_directory(self, tmp_path: Path):
        """Test staging into a missing directory is an error."""
        with pytest.raises(StagingDirectoryError):
            store_icon_in_temp_dir(tmp_path / "stage" / "home.svg", "<svg/>")


class TestStagingDirectory:
    """Test the staging_directory context manager."""

    def test_removed_after_block(self, tmp_path: Path):
        """Test the directory exists inside the block and is gone after it."""
        with staging_directory(tmp_path / "stage") as temp_dir:
            assert temp_dir.is_dir()
            (temp_dir / "home.svg").write_text("<svg/>", encoding="utf-8")

        assert not temp_dir.exists()

    def test_removed_when_block_raises(self, tmp_path: Path):
        """Test the directory is removed and the error propagates."""
        with pytest.raises(ValueError, match="boom"):
            with staging_directory(tmp_path / "stage") as temp_dir:
                raise ValueError("boom")

        assert not temp_dir.exists()

    def test_removal_failure_after_error_is_logged(self, tmp_path: Path):
        """Test a failed removal does not hide the error raised in the block."""
        with patch("vjs_svg_sprite.sprite.staging.logger.error") as mock_error:
            with pytest.raises(ValueError, match="boom"):
                with staging_directory(tmp_path / "stage") as temp_dir:
                    temp_dir.rmdir()
                    raise ValueError("boom")

        assert mock_error.call_count == 1
        assert "Failed to remove staging directory" in mock_error.call_args[0][0]

    def test_removal_failure_after_success(self, tmp_path: Path):
        """Test a failed removal is an error when the block completed."""
        with pytest.raises(StagingDirectoryError):
            with staging_directory(tmp_path / "stage") as temp_dir:
                temp_dir.rmdir()
