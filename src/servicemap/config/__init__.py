"""Application configuration."""

from servicemap.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
