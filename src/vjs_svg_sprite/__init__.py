"""Build an SVG symbol sprite from a directory of individual SVG icons."""

__version__ = "1.0.0"
