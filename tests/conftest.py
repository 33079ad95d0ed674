"""Common fixtures for testing the SVG sprite builder."""

import json
from pathlib import Path
from typing import Any

import pytest

from vjs_svg_sprite.models.config import (
    SpriteAssemblyConfig,
    SpriteConfig,
    default_icon_optimizer_config,
    default_sprite_optimizer_config,
)
from vjs_svg_sprite.optimizer import SvgOptimizer

HOME_ICON = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink"
     width="24px" height="24px" viewBox="0 0 24 24" version="1.1">
  <!-- Generator: Sketch 52.6 -->
  <title>home</title>
  <desc>Created with Sketch.</desc>
  <g id="Page-1" stroke="none" stroke-width="1" fill="none" fill-rule="evenodd">
    <g id="home">
      <path d="M 10 20 L 10 14 L 14 14 L 14 20 L 19 20 L 19 12 L 22 12 L 12 3 L 2 12 L 5 12 L 5 20 Z" fill="#000000"/>
    </g>
  </g>
</svg>
"""

SEARCH_ICON = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <defs>
    <clipPath id="clip">
      <rect width="24" height="24"/>
    </clipPath>
  </defs>
  <g clip-path="url(#clip)">
    <path d="M15.5 14h-.79l-.28-.27A6.47 6.47 0 0 0 16 9.5 6.5 6.5 0 1 0 9.5 16c1.61 0 3.09-.59 4.23-1.57l.27.28v.79l5 4.99L20.49 19l-4.99-5z"/>
  </g>
</svg>
"""


def write_icon(directory: Path, name: str, content: str) -> Path:
    """Write an icon file, creating its directory."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture()
def home_icon() -> str:
    """Markup of an editor-exported icon with metadata to strip."""
    return HOME_ICON


@pytest.fixture()
def search_icon() -> str:
    """Markup of an icon with an internal clip path reference."""
    return SEARCH_ICON


@pytest.fixture()
def icon_project(tmp_path: Path) -> Path:
    """Create a working directory with two icons and an icon configuration.

    Layout:
        icons/home.svg
        icons/extra/search.svg
        vjs-icons-config.json
    """
    write_icon(tmp_path / "icons", "home.svg", HOME_ICON)
    write_icon(tmp_path / "icons" / "extra", "search.svg", SEARCH_ICON)

    config: dict[str, Any] = {
        "root-dir": "icons",
        "icons": {
            "home": "home.svg",
            "search": {"file": "search.svg", "root-dir": "icons/extra"},
        },
    }
    (tmp_path / "vjs-icons-config.json").write_text(json.dumps(config), encoding="utf-8")
    return tmp_path


@pytest.fixture()
def sprite_config() -> SpriteConfig:
    """Icon configuration matching the icon_project layout."""
    return SpriteConfig.model_validate(
        {
            "root-dir": "icons",
            "icons": {
                "home": "home.svg",
                "search": {"file": "search.svg", "root-dir": "icons/extra"},
            },
        }
    )


@pytest.fixture()
def assembly_config() -> SpriteAssemblyConfig:
    """Default sprite assembly configuration."""
    return SpriteAssemblyConfig()


@pytest.fixture()
def icon_optimizer() -> SvgOptimizer:
    """Optimizer with the default per-icon pipeline."""
    return SvgOptimizer(default_icon_optimizer_config())


@pytest.fixture()
def sprite_optimizer() -> SvgOptimizer:
    """Optimizer with the default sprite pipeline."""
    return SvgOptimizer(default_sprite_optimizer_config())

