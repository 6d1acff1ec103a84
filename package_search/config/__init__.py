"""Configuration management for the package search service."""

from .settings import Settings, current_settings, get_settings

__all__ = ["Settings", "current_settings", "get_settings"]
