"""Configuration management."""

from fuzzbox.config.loader import get_config, load_config, reload_config, reset_config
from fuzzbox.config.schema import (
    FieldSpec,
    FuzzboxConfig,
    KeywordDefinition,
    KeywordMode,
    KeywordsConfig,
    LoggingConfig,
    SearchSettings,
)

__all__ = [
    "FieldSpec",
    "FuzzboxConfig",
    "KeywordDefinition",
    "KeywordMode",
    "KeywordsConfig",
    "LoggingConfig",
    "SearchSettings",
    "get_config",
    "load_config",
    "reload_config",
    "reset_config",
]
