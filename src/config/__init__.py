"""Configuration module -- exports Settings and the default admin key constant."""

from src.config.settings import DEFAULT_ADMIN_KEY, Settings

__all__ = ["DEFAULT_ADMIN_KEY", "Settings"]
