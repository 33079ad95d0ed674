"""Pydantic models for configuration and pipeline data."""
