"""Application configuration."""

from .settings import AfkSettings, get_settings, reset_settings

__all__ = ["AfkSettings", "get_settings", "reset_settings"]
