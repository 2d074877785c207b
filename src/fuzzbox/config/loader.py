"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from fuzzbox.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_CASE_SENSITIVE,
    ENV_DEBOUNCE,
    ENV_LIMIT,
    ENV_LOG_LEVEL,
    ENV_MAX_STRING_LENGTH,
    ENV_THRESHOLD,
    get_config_path,
)
from fuzzbox.config.schema import FuzzboxConfig
from fuzzbox.exceptions import ConfigError, ConfigValidationError

# Global config instance (singleton)
_config: FuzzboxConfig | None = None

# Environment variable -> [search] setting it overrides
_SEARCH_ENV_OVERRIDES: dict[str, str] = {
    ENV_THRESHOLD: "threshold",
    ENV_LIMIT: "limit",
    ENV_DEBOUNCE: "debounce",
    ENV_CASE_SENSITIVE: "case_sensitive",
    ENV_MAX_STRING_LENGTH: "max_string_length",
}


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = False,
) -> FuzzboxConfig:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If configuration cannot be loaded.
        ConfigValidationError: If configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if not create_if_missing:
            return _apply_env_overrides({})
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TOML)

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    return _apply_env_overrides(data)


def _apply_env_overrides(data: dict) -> FuzzboxConfig:
    """Merge environment variable overrides into raw data, then validate.

    Overrides are merged before validation so that string values from the
    environment go through the same coercion and range checks as the file.
    """
    search = dict(data.get("search", {}))
    for env_name, setting in _SEARCH_ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            search[setting] = value

    logging_section = dict(data.get("logging", {}))
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        logging_section["level"] = log_level.upper()

    merged = {**data, "search": search, "logging": logging_section}
    try:
        return FuzzboxConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e


def get_config() -> FuzzboxConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.

    Returns:
        Current configuration.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Path | None = None) -> FuzzboxConfig:
    """Reload configuration from disk.

    Args:
        config_path: Path to config file. If None, uses default.

    Returns:
        Reloaded configuration.
    """
    global _config
    _config = load_config(config_path)
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
