"""Tests for writing compiled artifacts."""

from pathlib import Path

import pytest

from vjs_svg_sprite.exceptions import OutputWriteError
from vjs_svg_sprite.sprite.writer import persist_svg_sprite_content


def test_write_text_creates_parents(tmp_path: Path):
    """Test text is written and missing directories are created."""
    target = tmp_path / "dist" / "sprite" / "icons.svg"

    assert persist_svg_sprite_content(target, "<svg/>") == target
    assert target.read_text(encoding="utf-8") == "<svg/>"


def test_write_bytes(tmp_path: Path):
    """Test bytes are written unchanged."""
    target = tmp_path / "index.html"

    persist_svg_sprite_content(str(target), b"<html></html>")

    assert target.read_bytes() == b"<html></html>"


def test_replaces_existing_file(tmp_path: Path):
    """Test an existing file is overwritten."""
    target = tmp_path / "icons.svg"
    target.write_text("<svg><old/></svg>", encoding="utf-8")

    persist_svg_sprite_content(target, "<svg/>")

    assert target.read_text(encoding="utf-8") == "<svg/>"


def test_parent_is_a_file(tmp_path: Path):
    """Test write failures raise OutputWriteError."""
    (tmp_path / "dist").write_text("", encoding="utf-8")
    target = tmp_path / "dist" / "icons.svg"

    with pytest.raises(OutputWriteError) as exc_info:
        persist_svg_sprite_content(target, "<svg/>")

    assert exc_info.value.details["path"] == str(target)
