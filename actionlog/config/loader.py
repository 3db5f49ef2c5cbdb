"""TOML configuration layers.

Settings are assembled from up to two files in the config directory:
default.toml, then an overlay named after ACTIONLOG_ENV. Later layers win
key by key, with nested tables merged rather than replaced.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_VAR = "ACTIONLOG_CONFIG_DIR"
ENVIRONMENT_VAR = "ACTIONLOG_ENV"
DEFAULT_ENVIRONMENT = "development"
SEARCH_DEPTH = 5


def get_config_dir() -> Path:
    """Locate the directory holding the TOML layers.

    An explicit ACTIONLOG_CONFIG_DIR must exist. Otherwise the nearest
    config/ directory at or above the working directory is used.
    """
    explicit = os.environ.get(CONFIG_DIR_VAR)
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    cwd = Path.cwd()
    for candidate in [cwd, *cwd.parents][:SEARCH_DEPTH]:
        if (candidate / "config").exists():
            return candidate / "config"
    return Path("config")


def get_environment() -> str:
    return os.environ.get(ENVIRONMENT_VAR, DEFAULT_ENVIRONMENT)


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML layer.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")
    return tomllib.loads(file_path.read_text(encoding="utf-8"))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return base overlaid with override; neither input is modified."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def config_layers(config_dir: Path, environment: str) -> list[Path]:
    """Existing layer files in precedence order, lowest first.

    The environment overlay is only consulted when default.toml exists.
    """
    default = config_dir / "default.toml"
    if not default.exists():
        return []
    overlay = config_dir / f"{environment}.toml"
    return [default, overlay] if overlay.exists() else [default]


def load_config(
    config_dir: Path | None = None, environment: str | None = None
) -> dict[str, Any]:
    """Merge every available layer into one mapping.

    Without default.toml the result is empty and settings fall back to
    their model defaults.
    """
    layers = config_layers(
        config_dir or get_config_dir(), environment or get_environment()
    )
    config: dict[str, Any] = {}
    for layer in layers:
        config = deep_merge(config, load_toml(layer))
    return config
