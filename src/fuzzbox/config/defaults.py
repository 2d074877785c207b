"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Search defaults
DEFAULT_THRESHOLD: Final[float] = 0.3
DEFAULT_DEBOUNCE_MS: Final[float] = 0.0
DEFAULT_MIN_MATCH_CHAR_LENGTH: Final[int] = 1
DEFAULT_MAX_STRING_LENGTH: Final[int] = 1000
DEFAULT_FIELD_WEIGHT: Final[float] = 1.0

# Substring matches score SUBSTRING_BASE_SCORE + SUBSTRING_LENGTH_BONUS * len(query) / len(target)
SUBSTRING_BASE_SCORE: Final[float] = 0.9
SUBSTRING_LENGTH_BONUS: Final[float] = 0.1

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "fuzzbox"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "FUZZBOX_CONFIG"
ENV_THRESHOLD: Final[str] = "FUZZBOX_THRESHOLD"
ENV_LIMIT: Final[str] = "FUZZBOX_LIMIT"
ENV_DEBOUNCE: Final[str] = "FUZZBOX_DEBOUNCE"
ENV_CASE_SENSITIVE: Final[str] = "FUZZBOX_CASE_SENSITIVE"
ENV_MAX_STRING_LENGTH: Final[str] = "FUZZBOX_MAX_STRING_LENGTH"
ENV_LOG_LEVEL: Final[str] = "FUZZBOX_LOG_LEVEL"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# fuzzbox configuration

[search]
threshold = 0.3
# limit = 20          # unbounded when omitted
debounce = 0          # milliseconds
case_sensitive = false
min_match_char_length = 1
max_string_length = 1000

[logging]
level = "WARNING"
json_format = false
"""


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
