"""Sprite assembly: path resolution, staging, compilation and output."""
