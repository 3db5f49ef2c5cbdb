"""Configuration loading for actionlog.

Configuration is read from TOML files with environment variable overrides.

Usage:
    from actionlog.config import get_settings

    settings = get_settings()
    max_rounds = settings.engine.max_rounds
"""

from functools import lru_cache

from actionlog.config.loader import load_config
from actionlog.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance.

    Call `get_settings.cache_clear()` or reload_settings() to re-read
    the configuration files.
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
