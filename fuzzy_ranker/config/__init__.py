"""Configuration management for the fuzzy ranker."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
